from functools import lru_cache

from fastapi import Depends

from chasm.adapters.fs.filestore import LocalFileSystem
from chasm.adapters.github.transport import HttpxCommitTransport
from chasm.app_shell.config import AppConfig, load_config
from chasm.components.publish import PublishComponent, PublishSettings
from chasm.ports.filesystem import FileSystemPort
from chasm.ports.transport import CommitTransportPort


# --- Settings ---
@lru_cache
def get_settings() -> AppConfig:
    return load_config()


def publish_settings(config: AppConfig) -> PublishSettings:
    return PublishSettings(
        api_url=config.github_api_url,
        content_root=config.content_root,
        document_commit_message=config.document_commit_message,
        image_commit_message=config.image_commit_message,
        summary_marker=config.summary_marker,
    )


# --- Collaborators ---
# One pooled client per (user_agent, timeout), closed on shutdown
_transports: dict[tuple[str, float], HttpxCommitTransport] = {}


def get_transport(config: AppConfig = Depends(get_settings)) -> CommitTransportPort:
    key = (config.user_agent, config.request_timeout_seconds)
    if key not in _transports:
        _transports[key] = HttpxCommitTransport(user_agent=key[0], timeout=key[1])
    return _transports[key]


def close_transports() -> None:
    while _transports:
        _, transport = _transports.popitem()
        transport.close()


def get_filesystem() -> FileSystemPort:
    return LocalFileSystem()


# --- Component Services ---
def get_publish_component(
    config: AppConfig = Depends(get_settings),
    transport: CommitTransportPort = Depends(get_transport),
    filesystem: FileSystemPort = Depends(get_filesystem),
) -> PublishComponent:
    """Get publish component service."""
    return PublishComponent(
        transport=transport,
        filesystem=filesystem,
        settings=publish_settings(config),
    )
