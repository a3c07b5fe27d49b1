"""
Tests for the Main Runner
"""

import json
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import main


class TestRunReport:

    def test_demo_data_as_json(self, capsys):
        code = main.run_report(main.MOCK_DATA, as_json=True)
        output = json.loads(capsys.readouterr().out)

        assert code == 0
        assert list(output.keys()) == ["mia", "leo"]
        assert output["mia"][0]["sessionNumber"] == "Session #2"

    def test_single_player_text(self, capsys):
        code = main.run_report(main.MOCK_DATA, player="leo")
        out = capsys.readouterr().out

        assert code == 0
        assert "leo - 1 session(s)" in out
        assert "Session #1" in out
        assert "mia" not in out

    def test_unknown_player(self, capsys):
        main.run_report(main.MOCK_DATA, player="nobody")

        assert "No sessions recorded yet" in capsys.readouterr().out

    def test_invalid_timestamp_exit_code(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"username": "mia", "timestamp": "never"}]))

        assert main.run_report(path) == 1
        assert "invalid timestamp" in capsys.readouterr().err
