"""
Shared pytest fixtures for setup tests.
"""

import io
import shutil
import tempfile
from datetime import datetime
from typing import Generator

import pytest
from rich.console import Console as RichConsole

from hudu_setup.config.schema import (
    DeploymentConfig,
    GeneratedSecrets,
    S3Settings,
    StorageBackend,
    WizardAnswers,
)
from hudu_setup.ui.console import Console

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5)


@pytest.fixture
def fixed_time() -> datetime:
    return FIXED_TIME


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def recording_console() -> Console:
    """A console that writes to an in-memory buffer instead of the terminal."""
    rich_console = RichConsole(file=io.StringIO(), color_system=None, width=120)
    return Console(no_color=True, rich_console=rich_console)


@pytest.fixture
def fixed_secrets() -> GeneratedSecrets:
    """Deterministic secrets with the same shape as generated ones."""
    return GeneratedSecrets(
        secret_key_base="ab" * 64,
        password_key="P" * 32,
        two_factor_key="T" * 32,
    )


@pytest.fixture
def local_answers() -> WizardAnswers:
    return WizardAnswers(
        subdomain="hudu",
        domain="example.com",
        storage=StorageBackend.LOCAL,
    )


@pytest.fixture
def s3_answers() -> WizardAnswers:
    return WizardAnswers(
        subdomain="docs",
        domain="example.org",
        storage=StorageBackend.S3,
        s3=S3Settings(
            bucket="mybucket",
            region="us-east-1",
            access_key_id="AKIAEXAMPLE",
            secret_access_key="wJalr'XUtnFEMI/K7MDENG",
        ),
    )


@pytest.fixture
def local_config(local_answers, fixed_secrets) -> DeploymentConfig:
    return DeploymentConfig.from_answers(local_answers, fixed_secrets)


@pytest.fixture
def s3_config(s3_answers, fixed_secrets) -> DeploymentConfig:
    return DeploymentConfig.from_answers(s3_answers, fixed_secrets)
