"""
Tests for the table-ilp command line tools
"""

from table_ilp_solver.cli import main


def test_rank_prints_top_table(tmp_path, capsys):
    folder = tmp_path / "tables"
    folder.mkdir()
    (folder / "animals.csv").write_text("Animal,Legs\ncat,4\nbird,2\n")
    (folder / "planets.csv").write_text("Planet,Moons\nearth,1\nmars,2\n")
    env_file = tmp_path / "empty.env"
    env_file.write_text("")

    exit_code = main([
        "--env-file", str(env_file),
        "rank", "How many legs does a cat have?", "--tables", str(folder), "--max-tables", "1",
    ])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "animals.csv" in output
    assert "planets.csv" not in output


def test_align_word_overlap(capsys):
    exit_code = main(["align", "cat fish", "cat"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "WordOverlap" in output
    assert "cell -> q-choice" in output


def test_align_word2vec_needs_vectors(capsys):
    exit_code = main(["align", "cat", "dog", "--type", "Word2Vec"])

    assert exit_code == 2
    assert "--vectors" in capsys.readouterr().err
