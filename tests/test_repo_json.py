"""Tests for the JSON persistence adapter and habit store (repo_json.py)"""
import json

from repo_json import JSONRepo


def test_missing_file_loads_empty(repo_path):
    repo = JSONRepo(repo_path)

    assert repo.list_habits() == []
    assert repo_path.parent.is_dir()


def test_corrupt_file_loads_empty(repo_path):
    repo_path.parent.mkdir(parents=True)
    repo_path.write_text("{not json", encoding="utf-8")

    assert JSONRepo(repo_path).list_habits() == []


def test_non_list_blob_loads_empty(repo_path):
    repo_path.parent.mkdir(parents=True)
    repo_path.write_text(json.dumps({"habits": []}), encoding="utf-8")

    assert JSONRepo(repo_path).list_habits() == []


def test_every_mutation_persists_whole_collection(repo_path):
    repo = JSONRepo(repo_path)
    read = repo.add_habit("Read", "20 pages", "learning")
    walk = repo.add_habit("Walk")
    repo.toggle_completion(read.id, "2024-01-01")
    repo.set_note(walk.id, "2024-01-01", "rainy")

    reloaded = JSONRepo(repo_path).list_habits()

    assert [h.name for h in reloaded] == ["Read", "Walk"]
    assert reloaded[0].logs == {"2024-01-01": True}
    assert reloaded[0].description == "20 pages"
    assert reloaded[1].notes == {"2024-01-01": "rainy"}
    assert reloaded[1].category == "productivity"


def test_toggle_twice_removes_key(repo_path):
    repo = JSONRepo(repo_path)
    habit = repo.add_habit("Read")
    repo.toggle_completion(habit.id, "2024-01-01")
    repo.toggle_completion(habit.id, "2024-01-01")

    stored = json.loads(repo_path.read_text(encoding="utf-8"))

    assert stored[0]["logs"] == {}


def test_update_keeps_identity_and_order(repo_path):
    repo = JSONRepo(repo_path)
    first = repo.add_habit("Read")
    repo.add_habit("Walk")

    renamed = repo.rename_habit(first.id, "Read more", "30 pages")

    assert renamed.id == first.id
    assert [h.name for h in repo.list_habits()] == ["Read more", "Walk"]
    assert repo.get_habit(first.id).description == "30 pages"


def test_delete_removes_habit(repo_path):
    repo = JSONRepo(repo_path)
    habit = repo.add_habit("Read")
    repo.delete_habit(habit.id)

    assert repo.get_habit(habit.id) is None
    assert JSONRepo(repo_path).list_habits() == []


def test_unknown_ids_leave_collection_unchanged(repo_path):
    repo = JSONRepo(repo_path)
    repo.add_habit("Read")

    assert repo.toggle_completion("missing", "2024-01-01") is None
    assert repo.set_note("missing", "2024-01-01", "x") is None
    repo.delete_habit("missing")

    assert len(repo.list_habits()) == 1


def test_ids_are_unique(repo_path, monkeypatch):
    ids = iter(["dup0001", "dup0001", "new0002"])
    monkeypatch.setattr("repo_json.generate_id", lambda: next(ids))
    repo = JSONRepo(repo_path)

    first = repo.add_habit("Read")
    second = repo.add_habit("Walk")

    assert first.id == "dup0001"
    assert second.id == "new0002"


def test_legacy_records_without_notes_are_upgraded(repo_path):
    repo_path.parent.mkdir(parents=True)
    repo_path.write_text(
        json.dumps([{"id": "old1234", "name": "Stretch", "category": "health",
                     "created_at": "2023-05-01T00:00:00+00:00", "logs": {"2023-05-02": True}}]),
        encoding="utf-8",
    )

    habit = JSONRepo(repo_path).list_habits()[0]

    assert habit.notes == {}
    assert habit.logs == {"2023-05-02": True}


def test_save_failure_is_swallowed(repo_path, monkeypatch, caplog):
    repo = JSONRepo(repo_path)

    def boom(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("repo_json.os.replace", boom)
    habit = repo.add_habit("Read")

    assert repo.get_habit(habit.id) is not None
    assert "Failed to save habits" in caplog.text


def test_non_utf8_file_loads_empty(repo_path):
    repo_path.parent.mkdir(parents=True)
    repo_path.write_bytes(b"\xff\xfe[garbage")

    assert JSONRepo(repo_path).habits == []


def test_record_with_list_logs_is_normalized(repo_path):
    repo_path.parent.mkdir(parents=True)
    repo_path.write_text(
        json.dumps([{"id": "a", "name": "Read", "logs": ["2024-01-01"], "notes": "oops"}]),
        encoding="utf-8",
    )

    [habit] = JSONRepo(repo_path).list_habits()

    assert habit.logs == {}
    assert habit.notes == {}


def test_failed_dump_removes_temp_file(repo_path, monkeypatch):
    repo = JSONRepo(repo_path)

    def broken_dump(_obj, f, **_kwargs):
        f.write("[{")
        raise TypeError("not serializable")

    monkeypatch.setattr("repo_json.json.dump", broken_dump)
    repo.add_habit("Read")

    assert not (repo_path.parent / (repo_path.name + ".tmp")).exists()
    assert not repo_path.exists()
