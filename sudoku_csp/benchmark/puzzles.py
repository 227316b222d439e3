"""Built-in puzzles used by the benchmark and the CLI examples."""

from typing import Dict, List

# Classic 30-clue puzzle and its unique solution
CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def _blank(solution: str, cells: List[int]) -> str:
    chars = list(solution)
    for index in cells:
        chars[index] = "0"
    return "".join(chars)


SAMPLE_PUZZLES: Dict[str, List[str]] = {
    "near_complete": [
        _blank(CLASSIC_SOLUTION, [0, 10, 20, 40, 80]),
        _blank(CLASSIC_SOLUTION, list(range(0, 81, 7))),
        _blank(CLASSIC_SOLUTION, list(range(3, 81, 5))),
    ],
    "easy": [
        CLASSIC_PUZZLE,
        "003020600900305001001806400008102900700000008006708200002609500800203009005010300",
        "200080300060070084030500209000105408000000000402706000301007040720040060004010003",
    ],
}
