"""Tests for the persisted project list."""

from __future__ import annotations

import json

import pytest

from devnest.core.projects import ProjectList
from devnest.core.scanner import scan_project

pytestmark = pytest.mark.usefixtures("isolate_storage")


@pytest.fixture
def projects_file(isolate_storage):
    return isolate_storage.parent / "projects.json"


class TestProjectList:
    def test_empty(self):
        projects = ProjectList()
        assert len(projects) == 0
        assert projects.active() == []

    def test_add_persists(self, make_project, projects_file):
        root = make_project({"Cargo.toml": ""}, name="engine")
        record = ProjectList().add(scan_project(root))

        data = json.loads(projects_file.read_text())
        assert [p["id"] for p in data["projects"]] == [record.id]
        stored = data["projects"][0]
        assert stored["name"] == "engine"
        assert stored["path"] == str(root)
        assert stored["projectType"] == "rust"
        assert stored["isArchived"] is False

        reloaded = ProjectList()
        assert reloaded.get(record.id).name == "engine"

    def test_rescan_replaces_same_path(self, make_project):
        root = make_project({"package.json": {}})
        projects = ProjectList()
        first = projects.add(scan_project(root))
        projects.set_archived(first.id)

        second = projects.add(scan_project(root))
        assert len(projects) == 1
        assert second.id != first.id
        assert second.is_archived

    def test_get_by_path(self, make_project):
        root = make_project({"go.mod": ""})
        projects = ProjectList()
        record = projects.add(scan_project(root))
        assert projects.get(str(root)) is record
        assert projects.get("no-such-id") is None

    def test_archive_and_active(self, make_project):
        projects = ProjectList()
        a = projects.add(scan_project(make_project({}, name="a")))
        b = projects.add(scan_project(make_project({}, name="b")))

        assert projects.set_archived(a.id).is_archived
        assert [r.name for r in projects.active()] == ["b"]
        assert ProjectList().get(a.id).is_archived

        projects.set_archived(a.id, archived=False)
        assert [r.id for r in projects.active()] == [a.id, b.id]

    def test_missing_key(self):
        projects = ProjectList()
        assert projects.set_archived("nope") is None
        assert projects.remove("nope") is None

    def test_remove(self, make_project):
        projects = ProjectList()
        record = projects.add(scan_project(make_project({})))
        assert projects.remove(record.id) is record
        assert len(ProjectList()) == 0

    def test_malformed_records_skipped(self, projects_file):
        projects_file.write_text(json.dumps({"projects": [{"name": "no id"}, {"id": "1", "path": "/x"}, "junk"]}))
        projects = ProjectList()
        assert [r.id for r in projects] == ["1"]

    def test_unknown_fields_survive_round_trip(self, projects_file):
        projects_file.write_text(json.dumps({"projects": [{"id": "1", "name": "x", "path": "/x", "color": "red"}]}))
        ProjectList().set_archived("1")
        stored = json.loads(projects_file.read_text())["projects"][0]
        assert stored["color"] == "red"
        assert stored["isArchived"] is True
