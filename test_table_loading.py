"""
Tests for loading tables and the auxiliary CSV files
"""

import json

import pytest

from table_ilp_solver.config import TableParams
from table_ilp_solver.exceptions import ConfigurationError
from table_ilp_solver.models import AllowedColumnAlignment, InterColumnRelation
from table_ilp_solver.repository import (
    TableRepository,
    read_allowed_column_alignments,
    read_inter_column_relations,
    read_relation_representations,
    read_question_to_tables,
)
from table_ilp_solver.services import TableInterface

TABLE_NAMES = ["animals.csv", "food.csv"]


@pytest.fixture
def tables_folder(tmp_path):
    folder = tmp_path / "tables"
    folder.mkdir()
    (folder / "food.csv").write_text("Animal,Food\ncat,fish\ncow,grass\n")
    (folder / "animals.csv").write_text("Animal,Legs\ncat,4\nbird,2\n")
    (folder / "README.txt").write_text("not a table")
    return folder


class TestTableRepository:

    def test_csv_folder_sorted_by_file_name(self, tokenizer, tables_folder):
        tables = TableRepository(tokenizer).load_csv_folder(str(tables_folder))

        assert [t.name for t in tables] == ["animals.csv", "food.csv"]
        assert tables[0].title_row == ["Animal", "Legs"]
        assert tables[0].content_rows == [["cat", "4"], ["bird", "2"]]
        assert tables[0].full_content_tokenized[0][1] == ["leg"]

    def test_missing_folder(self, tokenizer, tmp_path):
        with pytest.raises(FileNotFoundError):
            TableRepository(tokenizer).load_csv_folder(str(tmp_path / "nope"))

    def test_tablestore_file(self, tokenizer, tmp_path):
        path = tmp_path / "tablestore.json"
        path.write_text(json.dumps({
            "description": "test export",
            "tables": [
                {"metadata": {"id": "t1"}, "contents": [["Animal", "Legs"], ["cat", 4]]},
                {"metadata": {"id": "t2"}, "contents": [["Planet"], ["mars"]]},
            ],
        }))

        tables = TableRepository(tokenizer).load_tablestore_file(str(path), ignore_ids=["t2"])

        assert [t.name for t in tables] == ["t1"]
        assert tables[0].rows[1] == ["cat", "4"]

    def test_tablestore_list_format(self, tokenizer, tmp_path):
        path = tmp_path / "tablestore.json"
        path.write_text(json.dumps([{"metadata": {"id": 7}, "contents": [["A"], ["b"]]}]))

        tables = TableRepository(tokenizer).load_tablestore_file(str(path))

        assert [t.name for t in tables] == ["7"]

    def test_load_tables_uses_params(self, tokenizer, tables_folder):
        tables = TableRepository(tokenizer).load_tables(TableParams(local_folder=str(tables_folder)))

        assert len(tables) == 2

    def test_remote_tables_not_supported(self, tokenizer):
        with pytest.raises(ValueError):
            TableRepository(tokenizer).load_tables(TableParams(use_local=False))


class TestAuxiliaryFiles:

    def test_allowed_column_alignments(self, tmp_path):
        path = tmp_path / "alignments.csv"
        path.write_text(
            "// table1,col1,table2,col2\n"
            "\n"
            "animals.csv,0,food.csv,0 // same animals\n"
        )

        alignments = read_allowed_column_alignments(str(path), TABLE_NAMES)

        assert alignments == [AllowedColumnAlignment("animals.csv", 0, "food.csv", 0)]

    def test_alignment_with_unknown_table(self, tmp_path):
        path = tmp_path / "alignments.csv"
        path.write_text("animals.csv,0,planets.csv,0\n")

        with pytest.raises(ConfigurationError, match="planets.csv"):
            read_allowed_column_alignments(str(path), TABLE_NAMES)

    def test_alignment_with_wrong_column_count(self, tmp_path):
        path = tmp_path / "alignments.csv"
        path.write_text("animals.csv,0,food.csv\n")

        with pytest.raises(ConfigurationError):
            read_allowed_column_alignments(str(path), TABLE_NAMES)

    def test_no_alignment_file(self):
        assert read_allowed_column_alignments("", TABLE_NAMES) == []

    def test_inter_column_relations(self, tmp_path):
        path = tmp_path / "relations.csv"
        path.write_text("// table,col1,col2,relation\nfood.csv,0,1,eats\n")

        relations = read_inter_column_relations(str(path), TABLE_NAMES)

        assert relations == [InterColumnRelation("food.csv", 0, 1, "eats")]

    def test_relation_with_bad_index(self, tmp_path):
        path = tmp_path / "relations.csv"
        path.write_text("food.csv,zero,1,eats\n")

        with pytest.raises(ConfigurationError):
            read_inter_column_relations(str(path), TABLE_NAMES)

    def test_relation_with_unknown_table(self, tmp_path):
        path = tmp_path / "relations.csv"
        path.write_text("planets.csv,0,1,orbits\n")

        with pytest.raises(ConfigurationError):
            read_inter_column_relations(str(path), TABLE_NAMES)

    def test_relation_representations(self, tmp_path):
        path = tmp_path / "representations.csv"
        path.write_text(
            "// relation,pattern\n"
            "eats,\\beats?\\b\n"
            "eats,\\bfood of\\b-1\n"
            "orbits,orbits\n"
        )

        representations = read_relation_representations(str(path))

        assert set(representations) == {"eats", "orbits"}
        eats = representations["eats"]
        assert [p.is_flipped for p in eats] == [False, True]
        assert eats[0].search("a cat eats fish")
        assert eats[1].pattern.pattern == "\\bfood of\\b"

    def test_question_to_tables(self, tmp_path):
        path = tmp_path / "cheat_sheet.csv"
        path.write_text(
            "1,  What do cats eat?  ,1-0-3,train\n"
            "2,short row\n"
        )

        question_to_tables = read_question_to_tables(str(path), ignore_list={3})

        assert question_to_tables == {"What do cats eat?": [1, 0]}

    def test_question_to_tables_bad_ids(self, tmp_path):
        path = tmp_path / "cheat_sheet.csv"
        path.write_text("1,What do cats eat?,one-two,\n")

        with pytest.raises(ConfigurationError):
            read_question_to_tables(str(path))


class TestTableInterfaceFromParams:

    def test_loads_tables_and_auxiliary_files(self, tokenizer, tables_folder, tmp_path):
        alignments = tmp_path / "alignments.csv"
        alignments.write_text("animals.csv,0,food.csv,0\n")
        relations = tmp_path / "relations.csv"
        relations.write_text("food.csv,0,1,eats\n")
        params = TableParams(
            local_folder=str(tables_folder),
            allowed_column_alignments_file=str(alignments),
            column_relations_file=str(relations),
        )

        interface = TableInterface.from_params(params, tokenizer)

        assert interface.all_table_names == ["animals.csv", "food.csv"]
        assert len(interface.allowed_column_alignments) == 1
        assert interface.allowed_relations[0].relation == "eats"
        assert interface.relation_to_representation == {}

    def test_unknown_table_fails_construction(self, tokenizer, tables_folder, tmp_path):
        alignments = tmp_path / "alignments.csv"
        alignments.write_text("animals.csv,0,planets.csv,0\n")
        params = TableParams(local_folder=str(tables_folder), allowed_column_alignments_file=str(alignments))

        with pytest.raises(ConfigurationError):
            TableInterface.from_params(params, tokenizer)

    def test_tablestore_alignment_file_used_in_tablestore_format(self, tokenizer, tmp_path):
        store = tmp_path / "tablestore.json"
        store.write_text(json.dumps([
            {"metadata": {"id": "t1"}, "contents": [["Animal"], ["cat"]]},
            {"metadata": {"id": "t2"}, "contents": [["Animal"], ["cow"]]},
        ]))
        alignments = tmp_path / "ts_alignments.csv"
        alignments.write_text("t1,0,t2,0\n")
        params = TableParams(
            use_tablestore_format=True,
            local_tablestore_file=str(store),
            allowed_column_alignments_file=str(tmp_path / "missing.csv"),
            allowed_tablestore_column_alignments_file=str(alignments),
        )

        interface = TableInterface.from_params(params, tokenizer)

        assert interface.allowed_column_alignments == [AllowedColumnAlignment("t1", 0, "t2", 0)]
