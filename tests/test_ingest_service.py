"""
Tests for folder ingestion and index building.

Tests:
- LoadResult accounting for good, bad and ignored files
- Deterministic, never-reused record ids
- Link column, header skipping and value trimming options
- Snapshot publication (no partial state on failure)
"""

from __future__ import annotations

import itertools

import pytest

from dataquery.core.errors import DataIOError
from dataquery.core.services.ingest_service import IngestService
from dataquery.models.index.value_index import ExactValueIndex
from dataquery.models.parser.table_parser import TableFileParser
from dataquery.models.store.snapshot_store import SnapshotStore
from helpers import write_csv, write_garbage, write_text, write_xlsx


def make_service(store: SnapshotStore | None = None, **options) -> IngestService:
    return IngestService(
        store=store or SnapshotStore(),
        parser=TableFileParser(),
        index=ExactValueIndex(),
        **options,
    )


# =============================================================================
# LOAD RESULT
# =============================================================================


class TestLoadResult:
    def test_counts_good_and_bad_files(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1", "l1"], ["A2", "l2"]])
        write_xlsx(data_folder, "b.xlsx", [["B1", "l3"], ["B2", "l4"], ["B3", "l5"]])
        write_garbage(data_folder, "c.xlsx")
        write_garbage(data_folder, "d.xls")

        result = make_service().load_folder(data_folder)

        assert result.file_count == 2
        assert result.record_count == 5
        assert sorted(result.skipped_files) == ["c.xlsx", "d.xls"]

    @pytest.mark.parametrize("names", list(itertools.permutations(["a", "b", "c"])))
    def test_counts_do_not_depend_on_file_order(self, tmp_path, names):
        folder = tmp_path / "".join(names)
        # the good files get the first two names of the permutation, the bad one the last
        write_csv(folder, f"{names[0]}.csv", [["x"], ["y"]])
        write_csv(folder, f"{names[1]}.txt", [["z"]])
        write_garbage(folder, f"{names[2]}.xlsx")

        result = make_service().load_folder(folder)

        assert (result.file_count, result.record_count) == (2, 3)
        assert result.skipped_files == [f"{names[2]}.xlsx"]

    def test_unsupported_files_and_subfolders_are_ignored(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1", "l1"]])
        write_text(data_folder, "readme.md", "not data")
        write_text(data_folder, "image.png", "binary-ish")
        write_csv(data_folder / "nested", "deep.csv", [["N1", "l2"]])

        result = make_service().load_folder(data_folder)

        assert result.file_count == 1
        assert result.record_count == 1
        assert result.skipped_files == []

    def test_delimiter_only_rows_are_not_records(self, data_folder):
        write_csv(data_folder, "a.csv", [["", "", ""], ["X", "l"]])
        result = make_service().load_folder(data_folder)
        assert result.record_count == 1

    def test_empty_file_counts_as_parsed(self, data_folder):
        write_text(data_folder, "empty.csv", "")
        result = make_service().load_folder(data_folder)
        assert (result.file_count, result.record_count, result.skipped_files) == (1, 0, [])

    def test_empty_folder(self, data_folder):
        store = SnapshotStore()
        result = make_service(store).load_folder(data_folder)
        assert (result.file_count, result.record_count, result.skipped_files) == (0, 0, [])
        assert store.current().records == ()
        assert store.current().index.lookup("anything") == []


# =============================================================================
# RECORDS
# =============================================================================


class TestRecords:
    def test_ids_follow_file_then_row_order(self, data_folder):
        write_csv(data_folder, "b.csv", [["B1"], ["B2"]])
        write_csv(data_folder, "a.csv", [["A1"], ["A2"]])
        store = SnapshotStore()
        make_service(store).load_folder(data_folder)

        records = store.current().records
        assert [r.id for r in records] == ["1", "2", "3", "4"]
        assert [r.columns[0] for r in records] == ["A1", "A2", "B1", "B2"]

    def test_new_record_state(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1", "http://x/1", "extra"]])
        store = SnapshotStore()
        make_service(store).load_folder(data_folder)

        rec = store.current().records[0]
        assert rec.columns == ("A1", "http://x/1", "extra")
        assert rec.link == "http://x/1"
        assert rec.query_count == 0
        assert rec.is_verified is False
        assert rec.verify_time is None

    def test_ids_are_never_reused_across_reloads(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1"], ["A2"]])
        store = SnapshotStore()
        service = make_service(store)

        service.load_folder(data_folder)
        first_ids = {r.id for r in store.current().records}
        service.load_folder(data_folder)
        second_ids = {r.id for r in store.current().records}

        assert first_ids == {"1", "2"}
        assert second_ids == {"3", "4"}

    def test_ingesters_sharing_a_store_continue_one_id_sequence(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1"]])
        store = SnapshotStore()

        make_service(store).load_folder(data_folder)
        first_ids = [r.id for r in store.current().records]
        make_service(store).load_folder(data_folder)
        second_ids = [r.id for r in store.current().records]

        assert first_ids == ["1"]
        assert second_ids == ["2"]

    def test_bad_file_contributes_no_rows(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1"]])
        # decodes as none of the supported encodings, after a readable first row
        (data_folder / "b.csv").write_bytes(b"B1\n\xff\xff\n")
        write_garbage(data_folder, "c.xls")
        store = SnapshotStore()

        result = make_service(store).load_folder(data_folder)

        assert result.skipped_files == ["b.csv", "c.xls"]
        assert [r.columns for r in store.current().records] == [("A1",)]
        assert store.current().index.lookup("B1") == []


# =============================================================================
# OPTIONS
# =============================================================================


class TestOptions:
    def test_link_column_is_configurable(self, data_folder):
        write_csv(data_folder, "a.csv", [["http://x", "A1"]])
        store = SnapshotStore()
        make_service(store, link_column=0).load_folder(data_folder)
        assert store.current().records[0].link == "http://x"

    def test_short_row_has_empty_link(self, data_folder):
        write_csv(data_folder, "a.csv", [["A1"]])
        store = SnapshotStore()
        make_service(store).load_folder(data_folder)
        assert store.current().records[0].link == ""

    def test_skip_header_rows(self, data_folder):
        write_csv(data_folder, "a.csv", [["id", "link"], ["A1", "l1"]])
        write_csv(data_folder, "b.csv", [["id", "link"], ["B1", "l2"]])
        store = SnapshotStore()

        result = make_service(store, skip_header_rows=1).load_folder(data_folder)

        assert result.record_count == 2
        assert [r.columns[0] for r in store.current().records] == ["A1", "B1"]

    def test_strip_values(self, data_folder):
        write_text(data_folder, "a.csv", " A1 , http://x \n")
        store = SnapshotStore()
        make_service(store, strip_values=True).load_folder(data_folder)

        rec = store.current().records[0]
        assert rec.columns == ("A1", "http://x")
        assert store.current().index.lookup("A1")[0].record_id == rec.id

    def test_values_are_verbatim_by_default(self, data_folder):
        write_text(data_folder, "a.csv", " A1 ,x\n")
        store = SnapshotStore()
        make_service(store).load_folder(data_folder)

        assert store.current().index.lookup("A1") == []
        assert len(store.current().index.lookup(" A1 ")) == 1


# =============================================================================
# SNAPSHOT PUBLICATION
# =============================================================================


class TestSnapshot:
    def test_missing_folder_keeps_previous_snapshot(self, data_folder, tmp_path):
        write_csv(data_folder, "a.csv", [["A1"]])
        store = SnapshotStore()
        service = make_service(store)
        service.load_folder(data_folder)
        before = store.current()

        with pytest.raises(DataIOError):
            service.load_folder(tmp_path / "does-not-exist")

        assert store.current() is before

    def test_file_path_is_not_a_folder(self, data_folder):
        path = write_csv(data_folder, "a.csv", [["A1"]])
        with pytest.raises(DataIOError):
            make_service().load_folder(path)

    def test_reload_replaces_snapshot_wholesale(self, data_folder, tmp_path):
        write_csv(data_folder, "a.csv", [["OLD"]])
        other = tmp_path / "other"
        write_csv(other, "b.csv", [["NEW"]])
        store = SnapshotStore()
        service = make_service(store)

        service.load_folder(data_folder)
        old = store.current()
        service.load_folder(other)
        new = store.current()

        # a reader holding the old snapshot keeps a consistent view
        assert [r.columns for r in old.records] == [("OLD",)]
        assert len(old.index.lookup("OLD")) == 1
        assert new.index.lookup("OLD") == []
        assert len(new.index.lookup("NEW")) == 1
        assert new.folder == str(other)
        assert new.file_count == 1

    def test_snapshot_remembers_skipped_files(self, data_folder):
        write_garbage(data_folder, "bad.xlsx")
        store = SnapshotStore()
        make_service(store).load_folder(data_folder)
        assert store.current().skipped_files == ("bad.xlsx",)
        assert store.current().loaded_at is not None
