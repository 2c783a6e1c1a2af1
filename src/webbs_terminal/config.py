"""Engine settings, read from the environment."""

import os
from dataclasses import dataclass

from webbs_terminal.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from webbs_terminal.menu.screen import DEFAULT_PROMPT
from webbs_terminal.menu.session import DEFAULT_SESSION_TIMEOUT

ENV_PREFIX = "WEBBS_"


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings shared by the renderers, encoder and menu runtime.

    Environment variables (all optional):
        WEBBS_WIDTH, WEBBS_HEIGHT: default screen size
        WEBBS_FONT_FAMILY, WEBBS_FONT_SIZE: HTML preview font
        WEBBS_SESSION_TIMEOUT: idle seconds before a session expires
        WEBBS_PROMPT: text printed at the bottom of menu screens
        WEBBS_ENCODING: transport encoding (cp437 or utf-8)
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    font_family: str = "'Perfect DOS VGA 437', 'Courier New', monospace"
    font_size: str = "16px"
    session_timeout: int = DEFAULT_SESSION_TIMEOUT
    prompt: str = DEFAULT_PROMPT
    transport_encoding: str = "cp437"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Screen size must be positive, got {self.width}x{self.height}")
        if self.session_timeout <= 0:
            raise ValueError(f"Session timeout must be positive, got {self.session_timeout}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default):
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw == "":
                return default
            if isinstance(default, int):
                try:
                    return int(raw)
                except ValueError:
                    raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
            return raw

        return cls(
            width=get("WIDTH", defaults.width),
            height=get("HEIGHT", defaults.height),
            font_family=get("FONT_FAMILY", defaults.font_family),
            font_size=get("FONT_SIZE", defaults.font_size),
            session_timeout=get("SESSION_TIMEOUT", defaults.session_timeout),
            prompt=get("PROMPT", defaults.prompt),
            transport_encoding=get("ENCODING", defaults.transport_encoding),
        )
