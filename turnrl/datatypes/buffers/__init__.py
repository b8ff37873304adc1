# -*- coding: utf-8 -*-
'''
buffers module
==============

Classes
-------
Experience:
    one recorded transition.

MemoryBuffer:
    a fixed-capacity FIFO of `Experience` with uniform random sampling.
'''

from turnrl.datatypes.buffers.memory_buffer import Experience, MemoryBuffer

__all__ = ['Experience', 'MemoryBuffer']
