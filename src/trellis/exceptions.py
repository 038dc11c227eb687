# src/trellis/exceptions.py

"""
Exception hierarchy for trellis.

Test failures and test errors are never raised through this hierarchy; they
are data (see trellis.outcomes). These exceptions describe problems with the
harness itself: bad configuration, undiscoverable modules, faulting hooks.
"""


class TrellisError(Exception):
    """Base class for all trellis errors."""

    pass


class ConfigurationError(TrellisError):
    """Raised when a configuration file cannot be read or is invalid."""

    pass


class DiscoveryError(TrellisError):
    """Raised when a module cannot be imported or turned into a test tree."""

    def __init__(self, message: str, module: str | None = None, details: Exception | None = None):
        self.module = module
        self.details = details
        full_message = f"[Discovery] {message}"
        if module:
            full_message += f" (Module: '{module}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class HarnessError(TrellisError):
    """Raised when a notification hook faults while a test is being run.

    A faulting hook is a defect in the harness, not in the test, so it aborts
    the whole run instead of being recorded as an outcome.
    """

    def __init__(self, test_name: str, details: Exception | None = None):
        self.test_name = test_name
        self.details = details
        super().__init__(f"[Harness] Notification hook failed while running '{test_name}'")
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


# 🔼⚙️
