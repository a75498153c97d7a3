"""
ASL Semantics Analyzer - Main Interface

Interactive prompt for inspecting an ASL document:

- load <file>         load a JSON or YAML state machine definition
- validate [file]     list structural diagnostics, optionally saving them to a file
- states              list every state with its path
- scope <state>       show the variables in scope when a state starts
- complete <l>:<c>    show completion candidates at a 1-based line and column
- remote              cross-check the definition with AWS Step Functions
- help / quit

Launch with `python -m asl_semantics [file]` or the `asl-semantics` script.
"""

import logging
import sys
from typing import Callable, Dict, List, Optional

from colorama import Fore, Style
from prompt_toolkit import prompt, styles

from .asl.graph import StatePath, VisitResult, visit_all_states
from .document.ast_nodes import is_object_node
from .document.loader import AslDocument, DocumentLoader, Position
from .remote.sfn_validator import StepFunctionsDefinitionValidator
from .reporting.diagnostics_reporter import DiagnosticsReporter
from .reporting.scope_visualizer import ScopeVisualizer
from .service import AslLanguageService

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


def parse_state_reference(text: str):
    """
    Parse a state argument.

    "Pass_End" is a state id; "MyParallel/1/Inner" is an exact path in which numeric
    segments are Parallel branch indexes.
    """
    if PATH_SEPARATOR not in text:
        return text
    return tuple(int(segment) if segment.isdigit() else segment for segment in text.split(PATH_SEPARATOR))


def format_state_path(path: StatePath) -> str:
    return PATH_SEPARATOR.join(str(segment) for segment in path)


class AnalyzerMainInterface:
    """
    Main interface for the ASL semantics analyzer.

    Holds the currently loaded document and dispatches prompt commands to the
    language service and the reporters.
    """

    def __init__(self, service: Optional[AslLanguageService] = None, loader: Optional[DocumentLoader] = None,
                 remote_validator: Optional[StepFunctionsDefinitionValidator] = None, use_colors: bool = True):
        """Initialize the analyzer interface."""
        self.service = service or AslLanguageService()
        self.loader = loader or DocumentLoader(use_colors=use_colors, verbose=True)
        self.remote_validator = remote_validator
        self.diagnostics_reporter = DiagnosticsReporter(use_colors=use_colors)
        self.scope_visualizer = ScopeVisualizer(use_colors=use_colors)
        self.document: Optional[AslDocument] = None
        self.document_path: Optional[str] = None

        self.prompt_style = styles.Style.from_dict({
            "prompt": "ansimagenta bold",
        })

        self.commands: Dict[str, Callable[[List[str]], bool]] = {
            "load": self._cmd_load,
            "validate": self._cmd_validate,
            "states": self._cmd_states,
            "scope": self._cmd_scope,
            "complete": self._cmd_complete,
            "remote": self._cmd_remote,
            "help": self._cmd_help,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
        }

    def _print_banner(self):
        """Print the analyzer welcome banner."""
        banner = f"""
{Fore.CYAN}
╔══════════════════════════════════════════════════════════════════════════════╗
║                                                                              ║
║        ASL Semantics Analyzer                                                ║
║                                                                              ║
║    Validate state machine definitions, resolve variable scopes and           ║
║    explore completion candidates.                                            ║
║                                                                              ║
╚══════════════════════════════════════════════════════════════════════════════╝{Style.RESET_ALL}

{Fore.YELLOW}Type 'help' to list the available commands.{Style.RESET_ALL}
"""
        print(banner)

    def _read_command(self) -> str:
        try:
            return prompt([("class:prompt", "asl> ")], style=self.prompt_style).strip()
        except (EOFError, KeyboardInterrupt):
            print(f"\n{Fore.YELLOW}Input cancelled.{Style.RESET_ALL}")
            return "quit"

    def _require_document(self) -> bool:
        if self.document is None:
            print(f"{Fore.YELLOW}⚠️  No document loaded. Use 'load <file>' first.{Style.RESET_ALL}")
            return False
        return True

    def load_file(self, file_path: str) -> bool:
        result = self.loader.load_document_from_file(file_path)
        if not result["success"]:
            for error in result["errors"]:
                print(f"{Fore.RED}❌ {error}{Style.RESET_ALL}")
            return False

        self.document = result["document"]
        self.document_path = file_path
        print(f"{Fore.GREEN}✅ Loaded {file_path}{Style.RESET_ALL}")
        return True

    def handle_command(self, line: str) -> bool:
        """
        Execute one command line.

        Args:
            line: Raw input such as "scope Pass_End"

        Returns:
            False when the session should end, True otherwise
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        handler = self.commands.get(command)
        if handler is None:
            print(f"{Fore.RED}❌ Unknown command: {command}. Type 'help' for the list of commands.{Style.RESET_ALL}")
            return True
        return handler(args)

    def _cmd_load(self, args: List[str]) -> bool:
        if not args:
            print(f"{Fore.YELLOW}Usage: load <file>{Style.RESET_ALL}")
            return True
        self.load_file(" ".join(args))
        return True

    def _cmd_validate(self, args: List[str]) -> bool:
        if self._require_document():
            diagnostics = self.service.do_validation(self.document)
            report = self.diagnostics_reporter.render(diagnostics, title=self.document_path)
            print(report)
            if args:
                self._save_report(report, " ".join(args))
        return True

    def _save_report(self, report: str, file_path: str) -> None:
        try:
            self.diagnostics_reporter.save_to_file(report, file_path)
        except OSError as e:
            print(f"{Fore.RED}❌ Error saving report: {e}{Style.RESET_ALL}")
            return
        print(f"{Fore.GREEN}✅ Report saved to {file_path}{Style.RESET_ALL}")

    def _cmd_states(self, args: List[str]) -> bool:
        if not self._require_document():
            return True

        lines = []

        def collect(state_id, state, parent, path):
            state_type = state.get("Type", "?") if isinstance(state, dict) else "?"
            indent = "  " * (len([segment for segment in path if isinstance(segment, str)]) - 1)
            lines.append(f"{indent}• {state_id} ({state_type})  {Fore.LIGHTBLACK_EX}{format_state_path(path)}{Style.RESET_ALL}")
            return VisitResult.CONTINUE

        asl = self.document.root.value if is_object_node(self.document.root) else {}
        visit_all_states(asl, collect)
        if not lines:
            print(f"{Fore.YELLOW}⚠️  The document declares no states{Style.RESET_ALL}")
        for line in lines:
            print(line)
        return True

    def _cmd_scope(self, args: List[str]) -> bool:
        if not args:
            print(f"{Fore.YELLOW}Usage: scope <state id | path/with/segments>{Style.RESET_ALL}")
            return True
        if self._require_document():
            reference = parse_state_reference(" ".join(args))
            scope = self.service.get_variable_scope(self.document, reference)
            label = reference if isinstance(reference, str) else format_state_path(reference)
            self.scope_visualizer.print_scope(scope, state_name=label)
        return True

    def _cmd_complete(self, args: List[str]) -> bool:
        if len(args) != 1 or ":" not in args[0]:
            print(f"{Fore.YELLOW}Usage: complete <line>:<column>{Style.RESET_ALL}")
            return True
        if not self._require_document():
            return True

        line_text, _, column_text = args[0].partition(":")
        if not (line_text.isdigit() and column_text.isdigit()):
            print(f"{Fore.RED}❌ Line and column must be positive numbers{Style.RESET_ALL}")
            return True

        offset = self.document.offset_at(Position(int(line_text) - 1, int(column_text) - 1))
        state_names = self.service.complete_state_names(self.document, offset)
        variables = self.service.complete_variables(self.document, offset)

        if state_names:
            print(f"{Fore.CYAN}State names:{Style.RESET_ALL} {', '.join(state_names)}")
        if variables and variables["items"]:
            parent = f" (in {variables['parent_path']})" if variables["parent_path"] else ""
            print(f"{Fore.CYAN}Variables{parent}:{Style.RESET_ALL} {', '.join(variables['items'])}")
        if not state_names and not (variables and variables["items"]):
            print(f"{Fore.YELLOW}⚠️  No completion candidates at {args[0]}{Style.RESET_ALL}")
        return True

    def _cmd_remote(self, args: List[str]) -> bool:
        if not self._require_document():
            return True
        if self.remote_validator is None:
            self.remote_validator = StepFunctionsDefinitionValidator()

        result = self.remote_validator.validate(self.document)
        if result["success"] and result["diagnostics"]:
            self.diagnostics_reporter.print_report(result["diagnostics"], title="AWS Step Functions")
        return True

    def _cmd_help(self, args: List[str]) -> bool:
        print(f"{Fore.CYAN}Commands:{Style.RESET_ALL}")
        print("  load <file>         Load a JSON or YAML state machine definition")
        print("  validate [file]     List structural diagnostics, optionally saving the report")
        print("  states              List every state with its path")
        print("  scope <state>       Show the variables in scope (id, or path such as Par/0/Inner)")
        print("  complete <l>:<c>    Show completion candidates at a 1-based position")
        print("  remote              Validate with AWS Step Functions (needs credentials)")
        print("  help                Show this message")
        print("  quit                Exit")
        return True

    def _cmd_quit(self, args: List[str]) -> bool:
        return False

    def run(self):
        """Main execution loop for the analyzer interface."""
        self._print_banner()

        try:
            while self.handle_command(self._read_command()):
                pass
        except KeyboardInterrupt:
            print(f"\n{Fore.YELLOW}🛑 Process interrupted by user{Style.RESET_ALL}")
        finally:
            print(f"{Fore.CYAN}👋 Goodbye!{Style.RESET_ALL}")


def main(argv: Optional[List[str]] = None) -> int:
    """Start the analyzer, loading the file named on the command line if any."""
    args = sys.argv[1:] if argv is None else argv
    try:
        interface = AnalyzerMainInterface()
        if args:
            interface.load_file(args[0])
        interface.run()
    except Exception as e:
        print(f"{Fore.RED}Fatal error initializing the analyzer: {e}{Style.RESET_ALL}")
        logger.exception("Analyzer failed")
        return 1
    return 0
