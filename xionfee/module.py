"""The global fee application module: genesis handling, queries and migrations."""

from __future__ import annotations

import json
from typing import Any

from xionfee.migration import Migrator
from xionfee.params import MODULE_NAME, GenesisState, Params, default_genesis_state
from xionfee.querier import GrpcQuerier

CONSENSUS_VERSION = 2


def _decode_genesis(message: str | bytes) -> GenesisState:
    try:
        data = json.loads(message)
        if not isinstance(data, dict):
            raise ValueError("genesis state must be a JSON object")
        return GenesisState(Params.from_dict(data.get("params") or {}))
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed genesis state: {exc}") from exc


def _encode_genesis(state: GenesisState) -> str:
    return json.dumps({"params": state.params.to_dict()})


class AppModule:
    """Global fee module bound to a parameter subspace."""

    def __init__(self, subspace: Any) -> None:
        self.subspace = subspace
        self.querier = GrpcQuerier(subspace)
        migrator = Migrator(subspace)
        self._migrations = {1: migrator.migrate1to2}

    def name(self) -> str:
        """Return the module name."""
        return MODULE_NAME

    def default_genesis(self) -> str:
        """Return the default genesis state as JSON."""
        return _encode_genesis(default_genesis_state())

    def validate_genesis(self, message: str | bytes) -> GenesisState:
        """Decode and validate a JSON genesis state; raise ValueError on failure."""
        state = _decode_genesis(message)
        try:
            state.params.validate_basic()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"params: {exc}") from exc
        return state

    def init_genesis(self, message: str | bytes) -> None:
        """Store the params of a JSON genesis state."""
        self.subspace.set_param_set(_decode_genesis(message).params)

    def export_genesis(self) -> str:
        """Return the stored params as a JSON genesis state."""
        return _encode_genesis(GenesisState(self.subspace.get_param_set()))

    def consensus_version(self) -> int:
        """Return the module's consensus version."""
        return CONSENSUS_VERSION

    def run_migrations(self, from_version: int) -> None:
        """Run every registered migration from ``from_version`` up to the consensus version."""
        if not 1 <= from_version <= CONSENSUS_VERSION:
            raise ValueError(f"no migration path from version {from_version} for {MODULE_NAME}")
        for version in range(from_version, CONSENSUS_VERSION):
            migration = self._migrations.get(version)
            if migration is None:
                raise ValueError(f"missing migration from version {version} for {MODULE_NAME}")
            migration()