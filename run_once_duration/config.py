import os
from dataclasses import dataclass

DEFAULT_OVERRIDE_ANNOTATION = "openshift.io/active-deadline-seconds-override"


def _get_env(name: str, default: str) -> str:
    val = os.getenv(name)
    return val if val is not None and val != "" else default


def _parse_int(name: str, default: int) -> int:
    val = _get_env(name, str(default))
    try:
        return int(val)
    except Exception:
        return default


def _parse_bool(name: str, default: bool) -> bool:
    val = _get_env(name, "true" if default else "false")
    return val.lower() in ("1", "true", "yes")


def _parse_deadline(name: str) -> int | None:
    # Unlike the operational knobs, a bad deadline must stop the service
    val = _get_env(name, "")
    if val == "":
        return None
    try:
        seconds = int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of seconds, got: {val!r}")
    if seconds < 0:
        raise ValueError(f"{name} must be non-negative, got: {seconds}")
    return seconds


@dataclass(frozen=True)
class PolicyConfig:
    default_active_deadline_seconds: int | None = None


@dataclass(frozen=True)
class Settings:
    # Behavior
    enabled: bool = True
    default_active_deadline_seconds: int | None = None
    webhook_timeout_seconds: int = 5
    redis_url: str = ""
    namespace_cache_ttl_seconds: int = 30
    cache_timeout_seconds: int = 1
    app_env: str = "production"

    # Keys (annotations)
    override_annotation: str = DEFAULT_OVERRIDE_ANNOTATION


def load() -> Settings:
    return Settings(
        enabled=_parse_bool("RUN_ONCE_DURATION_ENABLED", True),
        default_active_deadline_seconds=_parse_deadline(
            "ACTIVE_DEADLINE_SECONDS_OVERRIDE"
        ),
        webhook_timeout_seconds=_parse_int("WEBHOOK_TIMEOUT_SECONDS", 5),
        redis_url=_get_env("REDIS_URL", ""),
        namespace_cache_ttl_seconds=_parse_int("NAMESPACE_CACHE_TTL_SECONDS", 30),
        cache_timeout_seconds=_parse_int("CACHE_TIMEOUT_SECONDS", 1),
        app_env=_get_env("APP_ENV", "production"),
        override_annotation=_get_env(
            "ACTIVE_DEADLINE_OVERRIDE_ANNOTATION", DEFAULT_OVERRIDE_ANNOTATION
        ),
    )


def policy_from_settings(settings: Settings) -> PolicyConfig | None:
    """A disabled policy is represented as no policy at all."""
    if not settings.enabled:
        return None
    return PolicyConfig(
        default_active_deadline_seconds=settings.default_active_deadline_seconds
    )


# Singleton settings for app usage (optional in tests)
settings: Settings = load()
