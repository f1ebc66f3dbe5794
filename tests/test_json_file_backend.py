"""Tests for the JSON file storage backend."""

import asyncio
import json
from pathlib import Path

import pytest

from subject_links_api.app.core.subjects import SUBJECTS
from subject_links_api.app.storage import JsonFileLinkBackend
from subject_links_api.app.storage.json_file import _to_base36, generate_link_id, utc_timestamp


def test_base36_encoding():
    assert _to_base36(0) == "0"
    assert _to_base36(35) == "z"
    assert _to_base36(36) == "10"
    assert _to_base36(1295) == "zz"


def test_generated_ids_are_compact_and_increasing():
    first = generate_link_id()
    second = generate_link_id()

    assert first.isalnum() and first == first.lower()
    assert int(second, 36) >= int(first, 36)


def test_timestamp_format():
    stamp = utc_timestamp()

    assert stamp.endswith("Z")
    assert len(stamp) == len("2024-01-01T00:00:00.000Z")


@pytest.mark.asyncio
async def test_initialise_creates_default_file(file_backend: JsonFileLinkBackend, data_file: Path):
    await file_backend.initialise()

    text = data_file.read_text(encoding="utf-8")
    data = json.loads(text)
    assert list(data) == SUBJECTS.keys()
    assert data["cn"] == {"name": "Computer Networks", "links": []}
    # Pretty-printed with two-space indentation.
    assert '\n  "toc": {' in text


@pytest.mark.asyncio
async def test_initialise_keeps_existing_file(file_backend: JsonFileLinkBackend, data_file: Path):
    data_file.write_text(json.dumps({"ai": {"name": "Artificial Intelligence", "links": []}}), encoding="utf-8")

    await file_backend.initialise()

    assert list(json.loads(data_file.read_text(encoding="utf-8"))) == ["ai"]


@pytest.mark.asyncio
async def test_any_operation_creates_missing_file(file_backend: JsonFileLinkBackend, data_file: Path):
    assert await file_backend.list_by_subject("ai") == []
    assert data_file.exists()


@pytest.mark.asyncio
async def test_add_writes_link_document(file_backend: JsonFileLinkBackend, data_file: Path):
    link = await file_backend.add("ai", "Agents", "https://ai.test/agents")

    stored = json.loads(data_file.read_text(encoding="utf-8"))["ai"]["links"]
    assert stored == [
        {
            "_id": link.id,
            "subjectKey": "ai",
            "title": "Agents",
            "url": "https://ai.test/agents",
            "addedBy": "admin",
            "addedAt": link.added_at,
        }
    ]


@pytest.mark.asyncio
async def test_file_is_reread_on_every_call(file_backend: JsonFileLinkBackend, data_file: Path):
    await file_backend.initialise()
    data = json.loads(data_file.read_text(encoding="utf-8"))
    data["toc"]["links"].append(
        {
            "_id": "manual",
            "subjectKey": "toc",
            "title": "Edited by hand",
            "url": "https://toc.test/manual",
            "addedBy": "editor",
            "addedAt": "2024-01-01T00:00:00.000Z",
        }
    )
    data_file.write_text(json.dumps(data), encoding="utf-8")

    links = await file_backend.list_by_subject("toc")

    assert [link.id for link in links] == ["manual"]
    assert links[0].added_by == "editor"


@pytest.mark.asyncio
async def test_subject_missing_from_file(file_backend: JsonFileLinkBackend, data_file: Path):
    data_file.write_text(json.dumps({"ai": {"name": "Artificial Intelligence", "links": []}}), encoding="utf-8")

    everything = await file_backend.list_all()
    assert set(everything) == set(SUBJECTS.keys())
    assert everything["rm"] == []

    await file_backend.add("rm", "Surveys", "https://rm.test/surveys")
    data = json.loads(data_file.read_text(encoding="utf-8"))
    assert data["rm"]["name"] == "Research Methodology"
    assert [link["title"] for link in data["rm"]["links"]] == ["Surveys"]


@pytest.mark.asyncio
async def test_remove_missing_link_does_not_rewrite(file_backend: JsonFileLinkBackend, data_file: Path):
    await file_backend.add("cn", "Notes", "https://x.test/cn1")
    before = data_file.read_text(encoding="utf-8")

    assert await file_backend.remove("cn", "does-not-exist") is None
    assert await file_backend.remove("sepm", "does-not-exist") is None
    assert data_file.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_concurrent_adds_in_one_process_are_all_kept(file_backend: JsonFileLinkBackend):
    await asyncio.gather(
        *(file_backend.add("sepm", f"Link {index}", f"https://sepm.test/{index}") for index in range(5))
    )

    links = await file_backend.list_by_subject("sepm")
    assert sorted(link.title for link in links) == [f"Link {index}" for index in range(5)]


def _failing_dump(data, fh, **kwargs):
    fh.write('{"toc": ')
    raise OSError(28, "No space left on device")


@pytest.mark.asyncio
async def test_failed_write_keeps_previous_file(file_backend: JsonFileLinkBackend, data_file: Path, monkeypatch):
    kept = await file_backend.add("cn", "Notes", "https://x.test/cn1")
    before = data_file.read_text(encoding="utf-8")
    monkeypatch.setattr("subject_links_api.app.storage.json_file.json.dump", _failing_dump)

    with pytest.raises(OSError):
        await file_backend.add("cn", "More notes", "https://x.test/cn2")
    with pytest.raises(OSError):
        await file_backend.remove("cn", kept.id)

    assert data_file.read_text(encoding="utf-8") == before
    assert not data_file.with_suffix(".tmp").exists()
    monkeypatch.undo()
    assert [link.id for link in await file_backend.list_by_subject("cn")] == [kept.id]


@pytest.mark.asyncio
async def test_remove_of_malformed_document_is_not_saved(file_backend: JsonFileLinkBackend, data_file: Path):
    data = file_backend.default_data()
    data["ai"]["links"].append({"_id": "broken", "subjectKey": "ai", "url": "https://ai.test"})
    data_file.write_text(json.dumps(data), encoding="utf-8")
    before = data_file.read_text(encoding="utf-8")

    with pytest.raises(ValueError):
        await file_backend.remove("ai", "broken")

    assert data_file.read_text(encoding="utf-8") == before
