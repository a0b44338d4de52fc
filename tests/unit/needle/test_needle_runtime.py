import json

from grafter.needle import L, Needle, Loader


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_packaged_assets_resolve_known_keys():
    runtime = Needle()
    assert "{count}" in runtime.get(L.merge.run.divergences, lang="en")


def test_missing_key_falls_back_to_identity(tmp_path):
    runtime = Needle(roots=[tmp_path])
    assert runtime.get(L.does.not_exist) == "does.not_exist"


def test_target_language_falls_back_to_default(tmp_path, monkeypatch):
    _write(tmp_path / "needle" / "en" / "main.json", {"greeting": "Hello"})
    _write(tmp_path / "needle" / "de" / "main.json", {"farewell": "Tschuess"})
    monkeypatch.setenv("GRAFTER_LANG", "de")

    runtime = Needle(roots=[tmp_path])

    assert runtime.get(L.farewell) == "Tschuess"
    assert runtime.get(L.greeting) == "Hello"


def test_project_overrides_win_over_earlier_roots(tmp_path):
    packaged = tmp_path / "packaged"
    project = tmp_path / "project"
    _write(packaged / "needle" / "en" / "main.json", {"greeting": "Hello"})
    _write(
        project / ".grafter" / "needle" / "en" / "main.json", {"greeting": "Howdy"}
    )

    runtime = Needle(roots=[packaged])
    assert runtime.get(L.greeting, lang="en") == "Hello"

    runtime.add_root(project)
    assert runtime.get(L.greeting, lang="en") == "Howdy"


def test_loader_skips_malformed_files(tmp_path, caplog):
    _write(tmp_path / "good.json", {"a": "A"})
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    registry = Loader().load_directory(tmp_path)

    assert registry == {"a": "A"}
    assert "bad.json" in caplog.text
