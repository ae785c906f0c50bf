"""
Hudu Self-Hosted .env Wizard

Collects deployment settings, generates secure keys and writes the .env
file a self-hosted Hudu instance reads at startup. Supports interactive
mode, non-interactive answers files, dry-run preview and auditing an
existing file.
"""

__version__ = "1.0.0"


# Lazy imports. Use: from hudu_setup import SetupWizard, main
def __getattr__(name):
    if name == "SetupWizard":
        from hudu_setup.wizard import SetupWizard
        return SetupWizard
    elif name == "main":
        from hudu_setup.cli import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = ["SetupWizard", "main", "__version__"]
