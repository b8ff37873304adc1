import setuptools

with open('README.rst') as f:
    long_description = f.read()

with open("requirements.txt", "r") as fh:
    requirements = [line.strip() for line in fh if line.strip()]

setuptools.setup(name='TurnRL',
                 version='0.1.0',
                 description='A Turn-based Reinforcement Learning Module for Python',
                 long_description=long_description,
                 long_description_content_type='text/x-rst',
                 license='MIT',
                 packages=setuptools.find_packages(exclude=('tests', 'docs')),
                 classifiers=[
                     "Programming Language :: Python :: 3",
                     "License :: OSI Approved :: MIT License",
                     "Operating System :: OS Independent",
                 ],
                 python_requires='>=3.10',
                 install_requires=requirements,
                 extras_require={'test': ['pytest']},
                 entry_points={
                     'console_scripts': ['turnrl=turnrl.__main__:main'],
                 },
                 )
