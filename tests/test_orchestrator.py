"""End-to-end index builds over class files on disk."""

import pytest

from debugmap.indexer.orchestrator import IndexerOrchestrator
from debugmap.indexer.runner import run_debug_index


def build(project, jobs=1):
    sources = sorted((project / "src").rglob("*.scala"))
    return IndexerOrchestrator(project / "classes", sources, jobs=jobs).index()


class TestEndToEnd:
    """Foo.scala compiled to com.acme.Foo spanning lines 10-40."""

    def test_resolve_known_class(self, sample_project):
        engine, _ = build(sample_project)
        foo = str(sample_project / "src" / "com" / "acme" / "Foo.scala")
        assert engine.resolve_source_location("com.acme.Foo", 25) == (foo, 25)

    def test_find_unit_by_source_line(self, sample_project):
        engine, _ = build(sample_project)
        unit = engine.find_unit("Foo.scala", 35, "com.acme")
        assert unit.qualified_name == "com.acme.Foo"
        assert (unit.start_line, unit.end_line) == (10, 40)

    def test_inner_class_wins_inside_its_range(self, sample_project):
        engine, _ = build(sample_project)
        assert engine.find_unit("Foo.scala", 25, "com.acme").qualified_name == "com.acme.Foo$Inner"

    def test_prefix_mismatch(self, sample_project):
        engine, _ = build(sample_project)
        assert engine.find_unit("Foo.scala", 25, "org.other") is None

    def test_unregistered_class(self, sample_project):
        engine, _ = build(sample_project)
        assert engine.resolve_source_location("com.acme.Missing", 1) == ("", 1)

    def test_same_named_sources_are_both_candidates(self, sample_project):
        engine, _ = build(sample_project)
        candidates = engine.find_sources_for_class("com.acme.Bar")
        assert len(candidates) == 2
        assert all(c.endswith("Bar.scala") for c in candidates)


class TestScanBehaviour:
    def test_corrupt_file_is_skipped(self, sample_project):
        engine, stats = build(sample_project)
        assert stats["class_files"] == 5
        assert stats["skipped"] == 1
        assert stats["processed"] == 4
        assert stats["units"] == 4
        assert stats["errors"][0]["path"].endswith("Broken.class")
        assert engine.find_sources_for_class("com.acme.Broken") == ()

    def test_unexpected_extractor_error_skips_only_that_file(self, sample_project, monkeypatch):
        from debugmap.indexer.extractor import extract_units

        def flaky(path):
            if path.name == "Bar.class":
                raise ValueError("unexpected constant")
            return extract_units(path)

        monkeypatch.setattr("debugmap.indexer.orchestrator.extract_units", flaky)

        engine, stats = build(sample_project)
        assert stats["skipped"] == 2
        assert stats["units"] == 3
        assert any(e["path"].endswith("Bar.class") for e in stats["errors"])
        assert engine.find_sources_for_class("com.acme.Bar") == ()
        assert engine.find_unit("Foo.scala", 35, "com.acme").qualified_name == "com.acme.Foo"

    def test_unit_without_source_still_indexed(self, sample_project):
        engine, _ = build(sample_project)
        (unit,) = engine.index.units_for(None)
        assert unit.qualified_name == "com.acme.NoSource"
        assert engine.resolve_source_location("com.acme.NoSource", 3) == ("", 3)

    def test_hidden_files_are_ignored(self, sample_project, class_bytes):
        hidden = sample_project / "classes" / ".cache"
        hidden.mkdir()
        (hidden / "Ghost.class").write_bytes(class_bytes("Ghost", source="Foo.scala"))
        (sample_project / "classes" / ".Hidden.class").write_bytes(class_bytes("Hidden"))

        _, stats = build(sample_project)
        assert stats["class_files"] == 5

    def test_missing_target_gives_empty_index(self, tmp_path):
        engine, stats = IndexerOrchestrator(tmp_path / "nope", []).index()
        assert stats["class_files"] == 0
        assert engine.resolve_source_location("a.B", 4) == ("", 4)

    def test_rebuild_is_idempotent(self, sample_project):
        first, _ = build(sample_project)
        second, _ = build(sample_project)
        assert first.index.class_name_to_source_paths == second.index.class_name_to_source_paths
        assert first.index.source_name_to_units == second.index.source_name_to_units

    @pytest.mark.parametrize("jobs", [2, 4])
    def test_parallel_build_matches_sequential(self, sample_project, jobs):
        sequential, seq_stats = build(sample_project)
        parallel, par_stats = build(sample_project, jobs=jobs)
        assert parallel.index.source_name_to_units == sequential.index.source_name_to_units
        assert (
            parallel.index.class_name_to_source_paths
            == sequential.index.class_name_to_source_paths
        )
        assert par_stats["skipped"] == seq_stats["skipped"]


class TestRunner:
    def test_explicit_paths(self, sample_project):
        engine, stats = run_debug_index(
            str(sample_project), target="classes", source_roots=["src"]
        )
        assert stats["units"] == 4
        assert stats["source_files"] == 3
        assert engine.find_unit("Bar.scala", 5, "com").qualified_name == "com.acme.Bar"

    def test_config_file_paths(self, sample_project):
        (sample_project / ".dmap").mkdir()
        (sample_project / ".dmap" / "config.json").write_text(
            '{"paths": {"target": "classes", "sources": ["src"]}}'
        )
        engine, stats = run_debug_index(str(sample_project))
        assert stats["target"] == str((sample_project / "classes").resolve())
        assert engine.find_source_for_class("com.acme.Foo").endswith("Foo.scala")

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_debug_index(str(tmp_path / "missing"))


def test_single_class_scenario(tmp_path, write_class):
    """Foo.scala -> com.acme.Foo (10-40): both query directions."""
    foo = tmp_path / "proj" / "src" / "Foo.scala"
    foo.parent.mkdir(parents=True)
    foo.write_text("package com.acme\n")
    write_class("com/acme/Foo", source="Foo.scala", methods=[[10, 22], [40]])

    engine, stats = IndexerOrchestrator(tmp_path / "classes", [foo]).index()

    assert stats["units"] == 1
    assert engine.resolve_source_location("com.acme.Foo", 25) == (str(foo), 25)
    unit = engine.find_unit("Foo.scala", 25, "com.acme")
    assert (unit.qualified_name, unit.start_line, unit.end_line) == ("com.acme.Foo", 10, 40)
    assert engine.find_unit("Foo.scala", 25, "org.other") is None
    assert engine.resolve_source_location("com.acme.Bar", 1) == ("", 1)
