"""
Configuration writer for the setup package.

Renders the deployment configuration as a dotenv document and writes it
atomically with owner-only permissions, with dry-run support.
"""

import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from hudu_setup.config.schema import DeploymentConfig
from hudu_setup.errors import EnvWriteError
from hudu_setup.utils.logger import logger
from hudu_setup.validators.env_keys import validate_env_key

ENV_FILE_MODE = 0o600
BANNER_WIDTH = 52
DOCS_URL = "https://support.hudu.com/"

# Closes the quoted string, emits a double-quoted quote, reopens the string
QUOTE_BREAK = "'\"'\"'"


def escape_value(value: str) -> str:
    """
    Quote a value for a single-quoted dotenv grammar.

    Nothing is interpreted inside single quotes, so the only character that
    needs care is the single quote itself, which is emitted as '"'"'.

    Args:
        value: Raw value, possibly empty

    Returns:
        The value wrapped in single quotes
    """
    return "'" + value.replace("'", QUOTE_BREAK) + "'"


def format_entry(key: str, value: str) -> str:
    """Format a single KEY='value' line, including the line terminator."""
    return f"{key}={escape_value(value)}\n"


def section_banner(title: str) -> str:
    """Build a '# ── Title ───' comment line padded to a fixed width."""
    head = f"# ── {title} "
    return head + "─" * max(3, BANNER_WIDTH - len(head))


@dataclass(frozen=True)
class EnvEntry:
    """A single key/value pair in the output file."""

    key: str
    value: str = ""


@dataclass(frozen=True)
class EnvSection:
    """An ordered group of entries with an optional comment banner."""

    title: Optional[str]
    entries: Tuple[EnvEntry, ...]

    @classmethod
    def of(cls, title: Optional[str], pairs: Iterable[Tuple[str, str]]) -> "EnvSection":
        return cls(title, tuple(EnvEntry(k, v) for k, v in pairs))


@dataclass(frozen=True)
class EnvDocument:
    """
    An ordered dotenv document.

    Keys must be bare identifiers and unique across the whole document.
    Order is preserved exactly as given.
    """

    title: str
    sections: Tuple[EnvSection, ...]
    comments: Tuple[str, ...] = ()

    def __post_init__(self):
        seen = set()
        for entry in self.entries():
            is_valid, error = validate_env_key(entry.key)
            if not is_valid:
                raise ValueError(error)
            if entry.key in seen:
                raise ValueError(f"Duplicate key: {entry.key}")
            seen.add(entry.key)

    def entries(self) -> List[EnvEntry]:
        return [entry for section in self.sections for entry in section.entries]

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries()]

    def as_dict(self) -> dict:
        return {entry.key: entry.value for entry in self.entries()}

    def replace_values(self, updates: Dict[str, str]) -> "EnvDocument":
        """Return a copy with some values replaced, keeping layout and order."""
        sections = tuple(
            EnvSection(
                section.title,
                tuple(EnvEntry(e.key, updates.get(e.key, e.value)) for e in section.entries),
            )
            for section in self.sections
        )
        return EnvDocument(self.title, sections, self.comments)


def render_document(document: EnvDocument, generated_at: Optional[datetime] = None) -> str:
    """
    Render a document to dotenv text.

    Args:
        document: The document to render
        generated_at: Timestamp for the header (defaults to now)

    Returns:
        The complete file content
    """
    generated_at = generated_at or datetime.now()
    lines: List[str] = []

    lines.append(f"# {document.title}\n")
    lines.append(f"# Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n")
    for comment in document.comments:
        lines.append(f"# {comment}\n")
    lines.append("\n")

    for index, section in enumerate(document.sections):
        if index > 0:
            lines.append("\n")
        if section.title:
            lines.append(section_banner(section.title) + "\n")
        for entry in section.entries:
            lines.append(format_entry(entry.key, entry.value))

    return "".join(lines)


def build_document(config: DeploymentConfig) -> EnvDocument:
    """
    Lay out the Hudu environment file.

    Args:
        config: Frozen deployment configuration

    Returns:
        EnvDocument with every key Hudu reads, in a stable order
    """
    secrets = config.secrets
    db = config.database
    smtp = config.smtp
    runtime = config.runtime
    s3 = config.s3

    sections = (
        EnvSection.of("Core", [
            ("SECRET_KEY_BASE", secrets.secret_key_base),
            ("PASSWORD_KEY", secrets.password_key),
            ("TWO_FACTOR_KEY", secrets.two_factor_key),
        ]),
        EnvSection.of("Domain", [
            ("DOMAIN", config.full_domain),
            ("URL", config.domain),
            ("SUBDOMAINS", config.subdomain),
            ("ONLY_SUBDOMAINS", "true"),
            ("VALIDATION", "http"),
            ("STAGING", "false"),
        ]),
        EnvSection.of("Database", db.model_dump().items()),
        EnvSection.of("SMTP (configure these to enable email)", smtp.model_dump().items()),
        EnvSection.of("Storage", [
            ("USE_LOCAL_FILESYSTEM", "true" if config.use_local_filesystem else "false"),
            ("AUTHENTICATE_UPLOADS", "true"),
            ("S3_ENDPOINT", s3.endpoint),
            ("S3_BUCKET", s3.bucket),
            ("S3_ACCESS_KEY_ID", s3.access_key_id),
            ("S3_SECRET_ACCESS_KEY", s3.secret_access_key),
            ("S3_REGION", s3.region),
        ]),
        EnvSection.of("Runtime", runtime.model_dump().items()),
    )

    return EnvDocument(
        title="Hudu Self-Hosted .env",
        sections=sections,
        comments=(f"Docs: {DOCS_URL}",),
    )


@dataclass
class FileChange:
    """Represents a pending file change."""

    path: str
    content: str
    description: str


@dataclass
class WriteResult:
    """Result of a write operation."""

    success: bool
    files_written: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    changes: List[FileChange] = field(default_factory=list)


class ConfigWriter:
    """Write the deployment configuration to an environment file."""

    def __init__(self, root_dir: Optional[str] = None, dry_run: bool = False):
        """
        Initialize the config writer.

        Args:
            root_dir: Directory relative paths are resolved against. Defaults to current directory.
            dry_run: If True, accumulate changes without writing.
        """
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()
        self.dry_run = dry_run
        self.pending_changes: List[FileChange] = []

    def resolve(self, path: str) -> Path:
        target = Path(path)
        if not target.is_absolute():
            target = self.root_dir / target
        return target

    def _write_file(self, path: Path, content: str, description: str) -> None:
        """
        Write content atomically with mode 0600 (or accumulate if dry_run).

        The content goes to a temporary file in the target directory, which
        mkstemp creates as 0600, and is then renamed over the target. A
        failure leaves any previous file untouched.

        Raises:
            EnvWriteError: If any filesystem operation fails
        """
        change = FileChange(str(path), content, description)

        if self.dry_run:
            self.pending_changes.append(change)
            return

        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                os.chmod(tmp_path, ENV_FILE_MODE)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            logger.error("env_write_failed", path=str(path), error=str(e))
            raise EnvWriteError(str(path), e.strerror or str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        self.pending_changes.append(change)
        logger.info("env_file_written", path=str(path), mode=oct(ENV_FILE_MODE))

    def write_document(
        self,
        document: EnvDocument,
        path: str = ".env",
        generated_at: Optional[datetime] = None,
    ) -> FileChange:
        """
        Render and write a document.

        Args:
            document: Document to write
            path: Target path, relative to root_dir unless absolute
            generated_at: Timestamp for the header comment

        Returns:
            The FileChange that was written (or accumulated in dry-run mode)
        """
        target = self.resolve(path)
        content = render_document(document, generated_at)
        self._write_file(target, content, "Hudu environment")
        return self.pending_changes[-1]

    def write_all(self, config: DeploymentConfig, path: str = ".env") -> WriteResult:
        """
        Write the Hudu environment file for a deployment configuration.

        Args:
            config: Frozen deployment configuration
            path: Target path

        Returns:
            WriteResult with success status and details
        """
        result = WriteResult(success=True)
        document = build_document(config)

        try:
            change = self.write_document(document, path)
        except EnvWriteError as e:
            result.success = False
            result.errors.append(str(e))
        else:
            if not self.dry_run:
                result.files_written.append(change.path)

        result.changes = self.pending_changes
        return result
