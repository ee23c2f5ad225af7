"""Unit tests for cli.output module."""

from unittest.mock import Mock, patch, MagicMock

from src.cli.output import OutputHandler
from src.content.models import OperationResult


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console is not None
        assert handler.console.no_color is False

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors."""
        handler = OutputHandler(no_color=True)

        assert handler.console.no_color is True


class TestOutputHandlerMessages:
    """Test cases for message output methods."""

    @patch('src.cli.output.Console')
    def test_success_displays_green_message(self, mock_console_class):
        """success() displays message with green checkmark."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        handler = OutputHandler()

        handler.success("Sidebar saved")

        mock_console.print.assert_called_once_with("[green]✓[/green] Sidebar saved")

    @patch('src.cli.output.Console')
    def test_error_displays_red_message(self, mock_console_class):
        """error() displays message with red X."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        handler = OutputHandler()

        handler.error("Something failed")

        mock_console.print.assert_called_once_with(
            "[red]✗[/red] Something failed",
            style="red"
        )

    @patch('src.cli.output.Console')
    def test_messages_escape_markup(self, mock_console_class):
        """Paths with brackets are not interpreted as Rich markup."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        handler = OutputHandler()

        handler.warning("Odd [name] in path")

        mock_console.print.assert_called_once_with(
            "[yellow]⚠[/yellow] Odd \\[name] in path",
            style="yellow"
        )

    @patch('src.cli.output.Console')
    def test_print_displays_message_without_markup(self, mock_console_class):
        """print() displays message without markup processing."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        handler = OutputHandler()

        handler.print("Plain [message]")

        mock_console.print.assert_called_once_with("Plain [message]", markup=False)


class TestOutputHandlerVerbosity:
    """Test cases for verbosity-controlled output."""

    @patch('src.cli.output.Console')
    def test_info_displays_at_verbosity_1(self, mock_console_class):
        """info() displays message at verbosity >= 1."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=1).info("Info message")

        mock_console.print.assert_called_once_with("Info message")

    @patch('src.cli.output.Console')
    def test_info_does_not_display_at_verbosity_0(self, mock_console_class):
        """info() does not display message at verbosity 0."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=0).info("Info message")

        mock_console.print.assert_not_called()

    @patch('src.cli.output.Console')
    def test_debug_displays_at_verbosity_2(self, mock_console_class):
        """debug() displays dimmed message at verbosity >= 2."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=2).debug("Debug message")

        mock_console.print.assert_called_once_with("[dim]Debug message[/dim]")

    @patch('src.cli.output.Console')
    def test_debug_does_not_display_at_verbosity_1(self, mock_console_class):
        """debug() does not display message at verbosity 1."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=1).debug("Debug message")

        mock_console.print.assert_not_called()


class TestOutputHandlerSpinner:
    """Test cases for spinner context manager."""

    @patch('src.cli.output.Live')
    @patch('src.cli.output.Spinner')
    def test_spinner_creates_live_spinner(self, mock_spinner_class, mock_live_class):
        """spinner() creates a transient Live spinner with the message."""
        mock_spinner = Mock()
        mock_spinner_class.return_value = mock_spinner
        mock_live = MagicMock()
        mock_live_class.return_value = mock_live

        handler = OutputHandler()

        with handler.spinner("Loading sidebar..."):
            pass

        mock_spinner_class.assert_called_once_with("dots", text="Loading sidebar...")
        mock_live_class.assert_called_once_with(
            mock_spinner,
            console=handler.console,
            refresh_per_second=10,
            transient=True
        )
        mock_live.__enter__.assert_called_once()
        mock_live.__exit__.assert_called_once()

    @patch('src.cli.output.Live')
    def test_spinner_skipped_without_color(self, mock_live_class):
        """spinner() does nothing with --no-color."""
        handler = OutputHandler(no_color=True)

        with handler.spinner("Loading sidebar..."):
            executed = True

        assert executed
        mock_live_class.assert_not_called()


class TestOutputHandlerPrintResult:
    """Test cases for print_result()."""

    @patch('src.cli.output.Console')
    def test_success_result(self, mock_console_class):
        """Successful result prints its message."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().print_result(OperationResult(success=True, message="Created page intro"))

        mock_console.print.assert_called_once_with("[green]✓[/green] Created page intro")

    @patch('src.cli.output.Console')
    def test_failed_step_is_reported(self, mock_console_class):
        """Failed multi-step result names the step."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().print_result(OperationResult(
            success=False,
            error="Path content/a not found",
            error_kind='not_found',
            failed_step='copy',
        ))

        mock_console.print.assert_called_once_with(
            "[red]✗[/red] Failed at step 'copy': Path content/a not found",
            style="red"
        )
