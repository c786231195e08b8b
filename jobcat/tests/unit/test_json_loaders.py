"""
tests/unit/test_json_loaders.py
──────────────────────────────────────────────────────────────────────────────
Unit tests for JsonCategoryLoader and JsonJobLoader against small JSON files
written to tmp_path.

Tests cover:
  • flat and nested category layouts, de-duplication by code
  • inconsistent duplicates, blank names and bad levels fail fast
  • job defaults (null description / minorCodes) and required fields
  • missing files, non-array roots and wrongly typed fields
"""
from __future__ import annotations

import pytest

from jobcat.adapters.json_category_loader import JsonCategoryLoader, flatten_nodes
from jobcat.adapters.json_job_loader import JsonJobLoader
from jobcat.domain.exceptions import DataFormatError
from jobcat.domain.models import CategoryLevel
from jobcat.ports.category_source_port import CategorySourcePort
from jobcat.ports.job_source_port import JobSourcePort
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex

NESTED = [
    {
        "code": 100000, "name": "Admin", "parentCode": None, "level": 1,
        "children": [
            {
                "code": 100100, "name": "Management", "parentCode": 100000, "level": 2,
                "children": [
                    {"code": 100101, "name": "General Manager", "parentCode": 100100,
                     "level": 3, "children": []},
                    {"code": 100105, "name": "Assistant", "parentCode": 100100, "level": 3},
                ],
            }
        ],
    }
]


class TestJsonCategoryLoader:
    """Tests for reading jobCategory.json into JobCategory records."""

    def test_is_category_source(self, tmp_path):
        """The loader satisfies CategorySourcePort structurally."""
        assert isinstance(JsonCategoryLoader(tmp_path / "x.json"), CategorySourcePort)

    def test_flat_file(self, write_json):
        """A flat array loads in file order with levels and parents mapped."""
        path = write_json("flat.json", [
            {"code": 100101, "name": "GM", "parentCode": 100100, "level": 3},
            {"code": 100000, "name": "Admin", "parentCode": None, "level": 1},
            {"code": 100100, "name": "Mgmt", "parentCode": 100000, "level": 2},
        ])
        categories = JsonCategoryLoader(path).load_categories()
        assert [c.code for c in categories] == [100101, 100000, 100100]
        assert categories[0].level is CategoryLevel.MINOR
        assert categories[1].parent_code is None

    def test_nested_children_flattened_in_document_order(self, write_json):
        """Parents come before children; siblings keep their order."""
        categories = JsonCategoryLoader(write_json("nested.json", NESTED)).load_categories()
        assert [c.code for c in categories] == [100000, 100100, 100101, 100105]
        JobCategoryHierarchyIndex(categories)  # loaded data forms a valid tree

    def test_flat_and_nested_duplicates_deduplicated(self, write_json):
        """A node listed both flat and nested is loaded once."""
        payload = NESTED + [
            {"code": 100100, "name": "Management", "parentCode": 100000, "level": 2},
            {"code": 100101, "name": "General Manager", "parentCode": 100100, "level": 3},
        ]
        categories = JsonCategoryLoader(write_json("mixed.json", payload)).load_categories()
        codes = [c.code for c in categories]
        assert len(codes) == len(set(codes)) == 4

    def test_inconsistent_duplicate_raises(self, write_json):
        """Same code with a different name is a format error, not a silent pick."""
        payload = NESTED + [
            {"code": 100101, "name": "Different name", "parentCode": 100100, "level": 3},
        ]
        with pytest.raises(DataFormatError, match="inconsistent"):
            JsonCategoryLoader(write_json("bad.json", payload)).load_categories()

    def test_case_insensitive_keys(self, write_json):
        """Key matching ignores case."""
        path = write_json("case.json", [
            {"Code": 1, "NAME": "Major", "ParentCode": None, "Level": 1},
            {"code": 2, "name": "Middle", "PARENTCODE": 1, "level": 2},
        ])
        categories = JsonCategoryLoader(path).load_categories()
        assert categories[1].parent_code == 1

    def test_null_nodes_skipped(self, write_json):
        """null entries in the root array are ignored."""
        path = write_json("nulls.json", [None, {"code": 1, "name": "M", "level": 1}])
        assert [c.code for c in JsonCategoryLoader(path).load_categories()] == [1]

    def test_blank_name_raises(self, write_json):
        """A whitespace-only name is rejected."""
        path = write_json("blank.json", [{"code": 1, "name": " ", "level": 1}])
        with pytest.raises(DataFormatError, match="name"):
            JsonCategoryLoader(path).load_categories()

    def test_invalid_level_raises(self, write_json):
        """Levels outside 1/2/3 are rejected."""
        path = write_json("level.json", [{"code": 1, "name": "M", "level": 7}])
        with pytest.raises(DataFormatError, match="level"):
            JsonCategoryLoader(path).load_categories()

    def test_boolean_level_raises(self, write_json):
        """JSON true is not level 1."""
        path = write_json("boollevel.json", [{"code": 1, "name": "M", "level": True}])
        with pytest.raises(DataFormatError, match="level"):
            JsonCategoryLoader(path).load_categories()

    def test_non_array_children_raises(self, write_json):
        """A scalar ``children`` value is a format error."""
        path = write_json("children.json", [
            {"code": 1, "name": "M", "level": 1, "children": 5},
        ])
        with pytest.raises(DataFormatError, match="children"):
            JsonCategoryLoader(path).load_categories()

    def test_missing_file_raises(self, tmp_path):
        """A missing file is reported as DataFormatError."""
        with pytest.raises(DataFormatError, match="not found"):
            JsonCategoryLoader(tmp_path / "missing.json").load_categories()

    def test_non_array_root_raises(self, write_json):
        """The root value must be an array."""
        path = write_json("object.json", {"code": 1})
        with pytest.raises(DataFormatError, match="array"):
            JsonCategoryLoader(path).load_categories()

    def test_invalid_json_raises(self, tmp_path):
        """Unparseable JSON is wrapped, not leaked as JSONDecodeError."""
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(DataFormatError):
            JsonCategoryLoader(path).load_categories()


class TestFlattenNodes:
    """Tests for the depth-first flattening helper."""

    def test_cycle_visited_once(self):
        """A node reachable from its own child is not revisited."""
        child = {"code": 2, "name": "B", "parentCode": 1, "level": 2}
        root = {"code": 1, "name": "A", "parentCode": None, "level": 1, "children": [child]}
        child["children"] = [root]
        nodes = flatten_nodes([root])
        assert [n["code"] for n in nodes] == [1, 2]

    def test_null_children_is_leaf(self):
        """``children: null`` behaves like no children."""
        nodes = flatten_nodes([{"code": 1, "name": "A", "level": 1, "children": None}])
        assert [n["code"] for n in nodes] == [1]

    @pytest.mark.parametrize("children", [5, "abc", {"code": 2}])
    def test_non_list_children_raises(self, children):
        """Anything other than an array or null under ``children`` fails fast."""
        root = {"code": 1, "name": "A", "level": 1, "children": children}
        with pytest.raises(DataFormatError, match="code=1"):
            flatten_nodes([root])


class TestJsonJobLoader:
    """Tests for reading job.json into JobPosting records."""

    def test_is_job_source(self, tmp_path):
        """The loader satisfies JobSourcePort structurally."""
        assert isinstance(JsonJobLoader(tmp_path / "x.json"), JobSourcePort)

    def test_loads_jobs(self, write_json):
        """Null description / minorCodes fall back to empty values."""
        path = write_json("jobs.json", [
            {"jobId": 1, "title": "Job 1", "description": "d", "minorCodes": [3, 3, 4]},
            {"jobId": 2, "title": "Job 2", "description": None, "minorCodes": None},
            {"jobId": 3, "title": "Job 3"},
        ])
        jobs = JsonJobLoader(path).load_jobs()
        assert [j.job_id for j in jobs] == [1, 2, 3]
        assert jobs[0].minor_codes == frozenset({3, 4})
        assert jobs[1].description == ""
        assert jobs[1].minor_codes == frozenset()
        assert jobs[2].minor_codes == frozenset()

    def test_repeated_job_ids_kept_as_separate_records(self, write_json):
        """Merging repeated ids is the job index's job, not the loader's."""
        path = write_json("dupes.json", [
            {"jobId": 1, "title": "A", "minorCodes": [1]},
            {"jobId": 1, "title": "B", "minorCodes": [2]},
        ])
        assert len(JsonJobLoader(path).load_jobs()) == 2

    def test_missing_job_id_raises(self, write_json):
        """jobId is required."""
        path = write_json("noid.json", [{"title": "Job"}])
        with pytest.raises(DataFormatError, match="jobId"):
            JsonJobLoader(path).load_jobs()

    def test_missing_title_raises(self, write_json):
        """An empty title is rejected."""
        path = write_json("notitle.json", [{"jobId": 1, "title": ""}])
        with pytest.raises(DataFormatError, match="title"):
            JsonJobLoader(path).load_jobs()

    def test_bad_minor_code_raises(self, write_json):
        """Non-integer minor codes are wrapped as DataFormatError."""
        path = write_json("badcode.json", [{"jobId": 1, "title": "J", "minorCodes": ["x"]}])
        with pytest.raises(DataFormatError):
            JsonJobLoader(path).load_jobs()

    def test_scalar_minor_codes_raises(self, write_json):
        """A bare number instead of an array is a format error."""
        path = write_json("scalar.json", [{"jobId": 1, "title": "J", "minorCodes": 5}])
        with pytest.raises(DataFormatError, match="jobId=1"):
            JsonJobLoader(path).load_jobs()

    def test_null_entries_skipped(self, write_json):
        """null entries in the root array are ignored."""
        path = write_json("nulls.json", [None, {"jobId": 5, "title": "J"}])
        assert [j.job_id for j in JsonJobLoader(path).load_jobs()] == [5]

    def test_missing_file_raises(self, tmp_path):
        """A missing file is reported as DataFormatError."""
        with pytest.raises(DataFormatError):
            JsonJobLoader(tmp_path / "missing.json").load_jobs()
