"""Settings from the environment (and the repo-root .env when present)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from neo4j import GraphDatabase

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    snapshot_depth: int = 3
    name_lookup_depth: int = 2
    adult_age: int = 18
    distinguish_underage: bool = False
    log_level: str = "INFO"


def _int_env(environ, key: str, default: int) -> int:
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}.") from None
    if value < 0:
        raise ValueError(f"{key} must be non-negative, got {value}.")
    return value


def load_settings(environ=None, *, dotenv_path: Path | None = None) -> Settings:
    """Build Settings from environ (os.environ by default).

    When reading os.environ, a .env file at the repo root (or dotenv_path) is
    loaded first; variables already set in the environment win.
    """
    if environ is None:
        for path in (
            dotenv_path,
            Path(__file__).resolve().parents[3] / ".env",
            Path.cwd() / ".env",
        ):
            if path is not None and path.exists():
                load_dotenv(path)
                break
        environ = os.environ

    return Settings(
        neo4j_uri=environ.get("NEO4J_URI", Settings.neo4j_uri).strip(),
        neo4j_user=environ.get("NEO4J_USER", Settings.neo4j_user).strip(),
        neo4j_password=environ.get("NEO4J_PASSWORD", Settings.neo4j_password).strip(),
        snapshot_depth=_int_env(environ, "KINSHIP_SNAPSHOT_DEPTH", Settings.snapshot_depth),
        name_lookup_depth=_int_env(
            environ, "KINSHIP_NAME_LOOKUP_DEPTH", Settings.name_lookup_depth
        ),
        adult_age=_int_env(environ, "KINSHIP_ADULT_AGE", Settings.adult_age),
        distinguish_underage=environ.get("KINSHIP_DISTINGUISH_UNDERAGE", "").strip().lower()
        in _TRUTHY,
        log_level=(environ.get("LOG_LEVEL") or Settings.log_level).strip().upper(),
    )


def get_driver(settings: Settings):
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )
