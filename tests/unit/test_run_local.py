"""Unit tests for run_local module."""

import unittest
from unittest.mock import patch

import run_local


class TestRunLocal(unittest.TestCase):
    """Tests for run_local script."""

    @patch("run_local.execute_from_command_line")
    def test_main_calls_runlocal(self, mock_execute):
        """Test that main() calls the runlocal command."""
        with patch("sys.argv", ["run_local.py"]):
            run_local.main()

        mock_execute.assert_called_once()
        args = mock_execute.call_args[0][0]
        self.assertEqual(args[1:], ["runlocal"])

    @patch("run_local.execute_from_command_line")
    def test_main_passes_extra_arguments(self, mock_execute):
        """Test address arguments reach runserver."""
        with patch("sys.argv", ["run_local.py", "0.0.0.0:9000"]):
            run_local.main()

        self.assertEqual(mock_execute.call_args[0][0][1:], ["runlocal", "0.0.0.0:9000"])

    def test_module_has_correct_docstring(self):
        """Test that module has expected docstring."""
        self.assertIn("development server", run_local.__doc__)


if __name__ == "__main__":
    unittest.main()
