# -*- coding: utf-8 -*-
'''
Errors
======

The exceptions raised by `turnrl`.

Incompatibility between an agent and an environment is reported by
`Agent.try_init` returning `False`; the exceptions below are for callers that
cannot continue after such a failure.
'''


class TurnRLError(Exception):
    '''Base class of all `turnrl` exceptions.'''


class IncompatibleEnvironmentError(TurnRLError):
    '''An agent does not support the spaces of an environment.'''


class EncodingError(TurnRLError, ValueError):
    '''
    Discrete/continuous values do not match the dimensionality of a space.
    '''


class PersistenceError(TurnRLError, RuntimeError):
    '''Saving or loading an object failed.'''


class TrainingPreconditionError(TurnRLError):
    '''
    The trainer was set up incorrectly, e.g. the number of agents does not
    match the number of players. This is a programming error.
    '''


class ClientError(TurnRLError, ValueError):
    '''A malformed request to the prediction service.'''
