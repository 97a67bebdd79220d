"""Core provider model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderSpec:
    db_type: str
    display_name: str
    adapter_path: tuple[str, str]
    description: str = ""
    aliases: tuple[str, ...] = ()
    is_file_based: bool = False
    default_port: str = ""
    requires_auth: bool = True
    url_schemes: tuple[str, ...] = ()

    @property
    def default_port_number(self) -> int | None:
        return int(self.default_port) if self.default_port else None
