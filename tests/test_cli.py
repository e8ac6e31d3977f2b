import ast

import pytest

from gcp.cli import main
from gcp.instance import GraphInstance
from gcp.solution import count_colors, is_valid


def _parse_output(out: str) -> tuple[int, list[int]]:
    lines = out.splitlines()
    assert lines[0].startswith("Number of colors used: ")
    assert lines[1].startswith("Color assignment: ")
    assert lines[2].startswith("Duration: ")
    num_colors = int(lines[0].split(": ")[1])
    coloring = ast.literal_eval(lines[1].split(": ", 1)[1])
    return num_colors, coloring


@pytest.mark.parametrize(
    "extra",
    [
        ["-a", "grasp"],
        ["-a", "grasp-pr", "--pr-solutions", "3", "--grasp-iterations", "5"],
        ["-a", "genetic", "--generations", "50", "--population-size", "10"],
    ],
)
def test_cli_colors_instance(data_dir, capsys, extra):
    path = data_dir / "myciel3.col"

    assert main(["-p", str(path), "--seed", "5", "--workers", "1", *extra]) == 0

    num_colors, coloring = _parse_output(capsys.readouterr().out)
    graph = GraphInstance.from_file(path).graph
    assert is_valid(graph, coloring)
    assert num_colors == count_colors(coloring)


def test_cli_missing_file(tmp_path, capsys):
    assert main(["-p", str(tmp_path / "missing.col"), "-a", "grasp"]) == 1

    captured = capsys.readouterr()
    assert "Failed to open the specified instance" in captured.err
    assert captured.out == ""


def test_cli_invalid_configuration(data_dir, capsys):
    assert main(["-p", str(data_dir / "myciel3.col"), "-a", "grasp", "--color-list-size", "0"]) == 1
    assert "color_list_size" in capsys.readouterr().err


def test_cli_rejects_unknown_algorithm(data_dir):
    with pytest.raises(SystemExit):
        main(["-p", str(data_dir / "myciel3.col"), "-a", "tabu"])
