# -*- coding: utf-8 -*-
'''
datatypes module
================

The datatypes used in `turnrl`.

Classes
-------
Space, StateSpace, DiscreteSpace, BoxSpace:
    state and action spaces.

SpaceElem, Action, State, Element:
    points of a space.

Experience, MemoryBuffer:
    replay memory of the value agent (in `datatypes.buffers`).
'''

from turnrl.datatypes.space import (Action, BoxSpace, ContinuousRange,
                                    DiscreteSpace, Element, Space, SpaceElem,
                                    State, StateSpace, enumerate_discrete,
                                    space_dims)

__all__ = ['Action',
           'BoxSpace',
           'ContinuousRange',
           'DiscreteSpace',
           'Element',
           'Space',
           'SpaceElem',
           'State',
           'StateSpace',
           'enumerate_discrete',
           'space_dims']
