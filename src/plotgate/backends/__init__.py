"""Credential gate / action forwarder registry."""

from __future__ import annotations

from plotgate.backends.base import BaseActionForwarder, BaseCredentialGate
from plotgate.config import BackendType, PlotGateConfig

# Lazy registry — backend modules imported on demand so the mock backend
# works without pulling in the HTTP stack.
BACKEND_CLASSES: dict[BackendType, tuple[str, str]] = {
    BackendType.HTTP: (
        "plotgate.backends.http.HttpCredentialGate",
        "plotgate.backends.http.HttpActionForwarder",
    ),
    BackendType.MOCK: (
        "plotgate.backends.mock.MockCredentialGate",
        "plotgate.backends.mock.MockActionForwarder",
    ),
}


def _load(dotted: str):
    import importlib

    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, cls_name)


def create_backends(
    config: PlotGateConfig,
) -> tuple[BaseCredentialGate, BaseActionForwarder]:
    """Instantiate the gate and forwarder selected by ``config.backend``."""
    gate_path, forwarder_path = BACKEND_CLASSES[config.backend]
    gate_cls = _load(gate_path)
    forwarder_cls = _load(forwarder_path)

    if config.backend is BackendType.HTTP:
        from plotgate.backends.http import ApiClient

        client = ApiClient(config.api_base_url, timeout=config.request_timeout)
        gate = gate_cls(
            client,
            status_path=config.credentials_status_path,
            save_path=config.credentials_path,
        )
        return gate, forwarder_cls(client, path=config.trendline_path)

    return gate_cls(), forwarder_cls()


__all__ = [
    "BaseCredentialGate",
    "BaseActionForwarder",
    "BACKEND_CLASSES",
    "create_backends",
]
