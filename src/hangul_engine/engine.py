"""Process-wide engine state shared by every session."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from hangul_engine.buffer.sync import HostClient
from hangul_engine.candidates.dictionary import HanjaTable, load_default_tables
from hangul_engine.candidates.resolver import CandidateResolver
from hangul_engine.config import (
    ConfigStore,
    EngineConfig,
    parse_host_version,
    supports_client_commit,
)
from hangul_engine.keys.layout import US_KEYMAP, Keymap
from hangul_engine.runtime import telemetry
from hangul_engine.session import ComposerFactory, Session


class HangulEngine:
    """Owns settings, dictionary tables and the keymap; creates sessions.

    Tables and the settings snapshot are read-only once built. A settings
    change replaces the snapshot in the ``ConfigStore``; sessions pick it up
    on their next key event.
    """

    def __init__(
        self,
        *,
        config: Optional[EngineConfig] = None,
        store: Optional[ConfigStore] = None,
        hanja_table: Optional[HanjaTable] = None,
        symbol_table: Optional[HanjaTable] = None,
        keymap: Optional[Keymap] = US_KEYMAP,
        host_version: Optional[str] = None,
        composer_factory: Optional[ComposerFactory] = None,
    ) -> None:
        if store is not None and config is not None:
            raise ValueError("Provide either `config` or `store`, not both.")
        self.store = store or ConfigStore(config)
        if hanja_table is None:
            hanja_table, default_symbols = load_default_tables()
            if symbol_table is None:
                symbol_table = default_symbols
        self.resolver = CandidateResolver(hanja_table, symbol_table)
        self.keymap = keymap
        self.host_version: Tuple[int, int, int] = parse_host_version(host_version)
        self.use_client_commit = supports_client_commit(self.host_version)
        self.composer_factory = composer_factory
        self._sessions: Dict[int, Session] = {}
        self._last_id = 0
        telemetry.record_event(
            "engine.init",
            data={
                "host_version": ".".join(str(part) for part in self.host_version),
                "client_commit": self.use_client_commit,
                "hanja_entries": len(hanja_table),
            },
        )

    @classmethod
    def from_env(cls, **kwargs: object) -> "HangulEngine":
        return cls(config=EngineConfig.from_env(), **kwargs)  # type: ignore[arg-type]

    @property
    def config(self) -> EngineConfig:
        return self.store.current

    @property
    def sessions(self) -> Tuple[Session, ...]:
        return tuple(self._sessions.values())

    def create_session(self, host: HostClient) -> Session:
        self._last_id += 1
        session = Session(
            host,
            store=self.store,
            resolver=self.resolver,
            keymap=self.keymap,
            session_id=self._last_id,
            use_client_commit=self.use_client_commit,
            composer_factory=self.composer_factory,
        )
        self._sessions[session.id] = session
        return session

    def destroy_session(self, session: Session) -> None:
        if self._sessions.pop(session.id, None) is not None:
            session.destroy()

    def update_setting(self, key: str, value: object) -> EngineConfig:
        return self.store.update(key, value)

    def replace_settings(self, values: Mapping[str, object]) -> EngineConfig:
        return self.store.replace(values)


__all__ = ["HangulEngine"]
