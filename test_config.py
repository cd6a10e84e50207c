"""
Tests for environment-driven configuration
"""

from table_ilp_solver.config import IlpParams, SolverConfig, SolverParams, TableParams


def test_defaults():
    config = SolverConfig()

    assert config.tables.max_tables_per_question == 4
    assert config.tables.use_rank_threshold is False
    assert config.tables.rank_threshold == 0.25
    assert config.ilp.alignment_type == "Entailment"
    assert config.ilp.entailment_score_offset == 0.2
    assert config.solver.fail_on_unanswered_questions is True
    assert config.solver.use_fallback_solver is False


def test_table_params_from_env(monkeypatch):
    monkeypatch.setenv("TABLEILP_MAX_TABLES_PER_QUESTION", "2")
    monkeypatch.setenv("TABLEILP_USE_RANK_THRESHOLD", "true")
    monkeypatch.setenv("TABLEILP_RANK_THRESHOLD", "0.5")
    monkeypatch.setenv("TABLEILP_IGNORE_LIST", "3, 7")
    monkeypatch.setenv("TABLEILP_LOCAL_FOLDER", "/srv/tables")

    params = TableParams.from_env()

    assert params.max_tables_per_question == 2
    assert params.use_rank_threshold is True
    assert params.rank_threshold == 0.5
    assert params.ignore_list == [3, 7]
    assert params.local_folder == "/srv/tables"


def test_ilp_and_solver_params_from_env(monkeypatch):
    monkeypatch.setenv("TABLEILP_ALIGNMENT_TYPE", "WordOverlap")
    monkeypatch.setenv("TABLEILP_REDIS_PORT", "6380")
    monkeypatch.setenv("TABLEILP_WORD_VECTORS_LIMIT", "1000")
    monkeypatch.setenv("TABLEILP_USE_FALLBACK_SOLVER", "1")
    monkeypatch.setenv("TABLEILP_FAIL_ON_UNANSWERED_QUESTIONS", "no")

    ilp = IlpParams.from_env()
    solver = SolverParams.from_env()

    assert ilp.alignment_type == "WordOverlap"
    assert ilp.redis_port == 6380
    assert ilp.word_vectors_limit == 1000
    assert solver.use_fallback_solver is True
    assert solver.fail_on_unanswered_questions is False


def test_active_format_picks_auxiliary_files():
    params = TableParams(
        allowed_column_alignments_file="csv_alignments.csv",
        allowed_tablestore_column_alignments_file="ts_alignments.csv",
        column_relations_file="csv_relations.csv",
        column_relations_tablestore_file="ts_relations.csv",
    )
    assert params.alignments_file == "csv_alignments.csv"
    assert params.relations_file == "csv_relations.csv"

    params.use_tablestore_format = True
    assert params.alignments_file == "ts_alignments.csv"
    assert params.relations_file == "ts_relations.csv"


def test_dotenv_file(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TABLEILP_ALIGNMENT_TYPE=Word2Vec\nTABLEILP_MAX_TABLES_PER_QUESTION=6\n")
    # registered with monkeypatch so whatever load_dotenv sets is undone afterwards
    monkeypatch.setenv("TABLEILP_ALIGNMENT_TYPE", "")
    monkeypatch.delenv("TABLEILP_ALIGNMENT_TYPE")
    monkeypatch.setenv("TABLEILP_MAX_TABLES_PER_QUESTION", "")
    monkeypatch.delenv("TABLEILP_MAX_TABLES_PER_QUESTION")

    config = SolverConfig.from_env(str(env_file))

    assert config.ilp.alignment_type == "Word2Vec"
    assert config.tables.max_tables_per_question == 6
