import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


class InterfacePolicy(Enum):
    STRICT = "strict"    # silent interface + agreeing implementors is still an error
    LENIENT = "lenient"  # ... only a warning


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


AUDIT_INTERFACE_POLICY = os.getenv("AUDIT_INTERFACE_POLICY", "strict")
AUDIT_CHECK_RENAMED_MARKERS = _env_flag("AUDIT_CHECK_RENAMED_MARKERS", "true")
AUDIT_DEBUG = _env_flag("AUDIT_DEBUG", "false")


@dataclass
class AuditSettings:
    interface_policy: InterfacePolicy = InterfacePolicy.STRICT
    check_renamed_markers: bool = True
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AuditSettings":
        try:
            policy = InterfacePolicy(AUDIT_INTERFACE_POLICY.strip().lower())
        except ValueError:
            print(f"[Config] Unknown AUDIT_INTERFACE_POLICY '{AUDIT_INTERFACE_POLICY}', using strict")
            policy = InterfacePolicy.STRICT
        return cls(
            interface_policy=policy,
            check_renamed_markers=AUDIT_CHECK_RENAMED_MARKERS,
            debug=AUDIT_DEBUG,
        )


DebugLog = Callable[[str, str], None]


def debug_printer(enabled: bool) -> DebugLog:
    """Tagged print diagnostics, silent unless enabled."""
    def log(tag: str, message: str):
        if enabled:
            print(f"[{tag}] {message}")
    return log
