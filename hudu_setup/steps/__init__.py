"""
Setup steps, in the order the wizard runs them.
"""

from hudu_setup.steps.base import BaseStep, StepContext, StepResult
from hudu_setup.steps.domain import DomainStep
from hudu_setup.steps.storage import StorageStep
from hudu_setup.steps.keys import SecretsStep
from hudu_setup.steps.environment import EnvironmentStep

__all__ = [
    "BaseStep",
    "StepContext",
    "StepResult",
    "DomainStep",
    "StorageStep",
    "SecretsStep",
    "EnvironmentStep",
]
