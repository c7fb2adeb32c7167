"""Project metadata."""

import os

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def test_readme_metadata_points_at_a_shipped_file():
    with open(os.path.join(ROOT, "pyproject.toml"), encoding="utf-8") as fh:
        readme_lines = [line for line in fh if line.startswith("readme")]
    for line in readme_lines:
        path = line.split("=", 1)[1].strip().strip('"')
        assert os.path.exists(os.path.join(ROOT, path))
        assert path.lower().startswith("readme")
