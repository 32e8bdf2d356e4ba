"""
Lifecycle Enums

Defines the lifecycle of services and the phases of a module
"""

from enum import Enum


class ServiceLifeCycle(Enum):
    """Lifecycle of services"""
    SINGLETON = "SINGLETON"
    FACTORY = "FACTORY"

    @classmethod
    def from_singleton(cls, singleton: bool) -> 'ServiceLifeCycle':
        return cls.SINGLETON if singleton else cls.FACTORY


class ModulePhase(Enum):
    """Phase of a module: definitions may change only while configuring"""
    CONFIGURATION = "CONFIGURATION"
    READY = "READY"
