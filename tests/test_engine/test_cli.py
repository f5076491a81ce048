"""Tests for the command-line interface."""

import pytest

from hanabi_engine.cli import main, play_single, select_strategies, strategy_params


class TestStrategySelection:
    def test_default_selects_all_but_human(self):
        names = select_strategies(None)
        assert "robert" in names
        assert "human" not in names

    def test_word_selects_matching_names(self):
        assert select_strategies(["random"]) == ["random", "random-play"]
        assert select_strategies(["play"]) == ["random-play"]

    def test_no_match(self):
        assert select_strategies(["nobody"]) == []

    def test_robert_gets_params_file(self):
        assert strategy_params("robert", "p.txt") == {"params_file": "p.txt"}
        assert strategy_params("random", "p.txt") == {}


class TestCommands:
    def test_single_game_prints_final_score(self, capsys, tmp_path):
        score = play_single("conventions", seed=3, params_file=str(tmp_path / "none.txt"), color=False)
        out = capsys.readouterr().out
        assert f"Final score: {score}" in out
        assert "Player 0:" in out

    def test_benchmark_runs(self, capsys, tmp_path):
        main(
            [
                "--params", str(tmp_path / "none.txt"),
                "benchmark", "--strategies", "omniscient", "--games", "4", "--workers", "2",
            ]
        )
        out = capsys.readouterr().out
        assert "Omniscient + Omniscient: 4 games" in out

    def test_unknown_strategy_errors(self):
        with pytest.raises(SystemExit):
            main(["single", "--strategy", "nobody"])

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit):
            main([])
        assert "usage" in capsys.readouterr().out
