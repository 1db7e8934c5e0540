import pytest
from unittest.mock import AsyncMock, MagicMock

from hubfetch.infrastructure.error_handler import ProtocolError
from hubfetch.interfaces.api import HubDownloader
from hubfetch.models import ModelManifest, Repository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def downloader(client, config):
    return HubDownloader(
        config=config,
        manifest=ModelManifest({"org/model": ["Encoder.mlmodelc"]}),
        client=client,
    )


@pytest.fixture
def remote_repo(hub):
    hub.trees[""] = [
        hub.dir_row("Encoder.mlmodelc"),
        hub.add_file("config.json", b"{}"),
    ]
    hub.trees["Encoder.mlmodelc"] = [
        hub.add_file("Encoder.mlmodelc/coremldata.bin", b"coreml"),
        hub.add_file("Encoder.mlmodelc/model.mil", b"program"),
    ]
    return hub


async def test_load_models_downloads_and_returns_paths(downloader, remote_repo, tmp_path):
    models = await downloader.load_models("org/model", ["Encoder.mlmodelc"], tmp_path)

    assert models == {"Encoder.mlmodelc": tmp_path / "org--model" / "Encoder.mlmodelc"}
    assert (tmp_path / "org--model" / "config.json").read_bytes() == b"{}"
    assert downloader.supervisor.attempts_made == 1


async def test_corrupt_cache_is_wiped_and_downloaded_again(downloader, remote_repo, tmp_path):
    stale = tmp_path / "org--model" / "Encoder.mlmodelc"
    stale.mkdir(parents=True)
    (stale / "leftover.bin").write_bytes(b"junk")

    models = await downloader.load_models("org/model", ["Encoder.mlmodelc"], tmp_path)

    assert remote_repo.listed == ["", "Encoder.mlmodelc"]
    assert not (stale / "leftover.bin").exists()
    assert (stale / "coremldata.bin").read_bytes() == b"coreml"
    assert models["Encoder.mlmodelc"] == stale
    assert downloader.supervisor.attempts_made == 2


async def test_second_failure_is_fatal(downloader, remote_repo, tmp_path):
    remote_repo.listing_failures[""] = 500

    with pytest.raises(ProtocolError):
        await downloader.load_models("org/model", ["Encoder.mlmodelc"], tmp_path)

    assert remote_repo.listed == ["", ""]


async def test_partial_download_is_recovered(downloader, remote_repo, tmp_path):
    remote_repo.file_failures_once["Encoder.mlmodelc/model.mil"] = 503

    models = await downloader.load_models("org/model", ["Encoder.mlmodelc"], tmp_path)

    assert "Encoder.mlmodelc" in models
    assert remote_repo.downloaded.count("Encoder.mlmodelc/model.mil") == 2
    assert downloader.supervisor.attempts_made == 2


async def test_custom_loader_receives_repository_path(downloader, remote_repo, tmp_path):
    loader = MagicMock()
    loader.load = AsyncMock(return_value={"Encoder.mlmodelc": "handle"})

    result = await downloader.load_models(
        Repository("org/model", folder_name="cache"), ["Encoder.mlmodelc"], tmp_path, loader=loader
    )

    assert result == {"Encoder.mlmodelc": "handle"}
    loader.load.assert_awaited_once_with(tmp_path / "cache", ["Encoder.mlmodelc"])


async def test_progress_callback_is_forwarded(downloader, remote_repo, tmp_path):
    reports = []

    await downloader.load_models("org/model", ["Encoder.mlmodelc"], tmp_path,
                                 progress_callback=reports.append)

    assert sorted(r.file_path for r in reports) == [
        "Encoder.mlmodelc/coremldata.bin",
        "Encoder.mlmodelc/model.mil",
        "config.json",
    ]


async def test_sync_and_ensure_repository(downloader, remote_repo, tmp_path):
    result = await downloader.sync_repository("org/model", tmp_path)
    path = await downloader.ensure_repository("org/model", tmp_path)

    assert result.path == path == tmp_path / "org--model"
    assert not result.cache_hit


async def test_shared_client_is_not_closed(downloader, client):
    await downloader.aclose()
    assert not client.is_closed


async def test_owned_client_is_closed_on_exit(config):
    async with HubDownloader(config=config, environ={}) as downloader:
        client = downloader.client
    assert client.is_closed
