## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# sprig — A small dynamically-typed scripting language, run by walking its syntax tree.
#

import sys
import time
import traceback
import functools
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import SprigError, SprigParseError, SprigIncompleteParse
from .parser import format_parse_error_context
from .formatting import write_without_ansi, to_string, format_tree

from . import api


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    ast: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str


class SprigRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain
        self.show_ast = config.ast

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        if not is_repl and not self.ignore: sys.exit(1)

    def _handle_exception(self, exc, filename: str, source: str, is_repl: bool = False) -> bool:
        """Report an error; returns True only when the REPL should wait for more input instead."""
        if not is_repl: self.failure = True

        if isinstance(exc, SprigParseError):
            if is_repl and isinstance(exc, SprigIncompleteParse): return True
            context = format_parse_error_context(filename, exc.line, exc.column, exc.token, source=source)
            context += f"\n\033[90m{str(exc).replace(chr(10), ' ').replace(chr(9), ' ')}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        elif isinstance(exc, SprigError):
            detail = f"\033[1;97m{exc.kind}\033[0m in `\033[97m{filename}\033[0m`: {exc}"
            context = ''
            if exc.line is not None and source:
                lines = source.splitlines()
                text = lines[exc.line - 1] if 0 < exc.line <= len(lines) else ''
                column = text.find(exc.token) + 1 if exc.token else 0
                context = format_parse_error_context(filename, exc.line, column, exc.token if column else '', source=source)
            self._maybe_fatal_error("RUNTIME ERROR.", detail, type(exc).__name__, context, is_repl)
        elif isinstance(exc, RecursionError):
            self._maybe_fatal_error("RUNTIME ERROR.", f"Script in `\033[97m{filename}\033[0m` recursed too deeply!", type(exc).__name__, '', is_repl)
        elif isinstance(exc, Exception):
            print(f'\033[30;43m INTERNAL ERROR. \033[0m Host code raised while running `\033[97m{filename}\033[0m`! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            tb_lines = traceback.format_exception(exc)
            print(''.join(line for line in tb_lines if "<frozen" not in line), end='', file=sys.stderr)
            if not is_repl and not self.ignore: sys.exit(1)
        return False

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False, print_result: bool = False) -> None:
        on_error = None
        if is_repl or self.ignore:
            on_error = functools.partial(self._handle_exception, filename=filename, source=source, is_repl=is_repl)
        try:
            program = self.runtime.parse(source, filename=filename)
            if self.show_ast:
                print(f"\033[90m{format_tree(program)}\033[0m")
            result = self.runtime.interpret(program, verbosity=self.verbose, stats=self.total_stats, on_error=on_error)
            if print_result and result is not None:
                print(to_string(result))
        except (SprigError, Exception) as exc:
            self._handle_exception(exc, filename, source, is_repl=is_repl)
        else:
            self.executed_items += 1

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('sprig - Scripting language REPL; type Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0 and not source: continue
                if not source and line.strip() in ('quit', 'exit'): break
                source += line + "\n"

                try:
                    program = self.runtime.parse(source, filename='<REPL>')
                except SprigParseError as exc:
                    if not self._handle_exception(exc, '<REPL>', source, is_repl=True):
                        source = ""
                    continue

                on_error = functools.partial(self._handle_exception, filename='<REPL>', source=source, is_repl=True)
                try:
                    if self.show_ast:
                        print(f"\033[90m{format_tree(program)}\033[0m")
                    result = self.runtime.interpret(program, verbosity=self.verbose, on_error=on_error)
                    if result is not None: print("\033[90m>>>\033[0m", to_string(result))
                except Exception as exc:
                    self._handle_exception(exc, '<REPL>', source, is_repl=True)
                source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


def _inline_command_source(index: int, command: str) -> ExecutionItem:
    source = command.rstrip()
    if not source.endswith((';', '}')):
        source += ';'
    return ExecutionItem(source + '\n', f'<INPUT_{index}>')


def _parse_dev_tokens(tokens: list[str]) -> list[tuple[str, Path | str | None]]:
    actions: list[tuple[str, Path | str | None]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == '--':
            index += 1
            continue
        if token in ('-c', '--command'):
            index += 1
            if index >= len(tokens):
                raise click.BadParameter("Missing inline code after -c/--command option.")
            actions.append(('command', tokens[index]))
            index += 1
            continue
        if token.startswith('-c=') or token.startswith('--command='):
            _, value = token.split('=', 1)
            if value == '':
                raise click.BadParameter("Empty code supplied to command option.")
            actions.append(('command', value))
            index += 1
            continue
        if token in ('-r', '--repl'):
            actions.append(('repl', None))
            index += 1
            continue
        if token.startswith('-'):
            raise click.BadParameter(f"Unknown option `{token}`.")
        path = Path(token)
        if not path.exists():
            raise click.BadParameter(f"File `{token}` not found.")
        if path.suffix != '.sp':
            raise click.BadParameter(f"Expected `.sp` source file, got `{token}`.")
        actions.append(('file', path))
        index += 1
    return actions


@click.group(invoke_without_command=True, context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements as they execute; twice to include nested ones.')
@click.option('--ignore', '-i', is_flag=True, help='Report errors and continue with the next top-level statement.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of statements run).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--ast', is_flag=True, help='Print the syntax tree of each input before running it.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, ast: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain, ast=ast)

    if ctx.invoked_subcommand is not None:
        return

    # When invoked via module entry (python -m sprig), we route in __main__ block.
    return


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = SprigRunner(ctx.obj['config'])
    name = '<STDIN>' if script.name in (None, '-', '<stdin>') else script.name
    runner.execute_items((ExecutionItem(script.read(), name),))
    ctx.exit(runner.finalize())


@cli.command('run-dev', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def run_dev(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = SprigRunner(ctx.obj['config'])
    actions = _parse_dev_tokens(list(tokens))

    command_index = 1
    for action, payload in actions:
        if action == 'file':
            runner.execute_items((ExecutionItem(payload.read_text(encoding='utf-8'), str(payload)),))
        elif action == 'command':
            item = _inline_command_source(command_index, payload)
            runner._execute_script(item.source, item.filename, is_repl=False, print_result=True)
            command_index += 1
        elif action == 'repl':
            runner.repl()

    if not actions:
        runner.repl()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = SprigRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--ignore', '--stats', '--plain', '--ast', '-i', '-p') or (t.startswith('-v') and t.strip('v') == '-') or t == '--verbose']
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r == ['-'] or (len(r) >= 2 and r[0] == '-f' and r[1] == '-'):
        cmd, tail = 'run-file', ['-']
    elif r == ['--repl'] or r == ['-r']:
        cmd, tail = 'run-repl', []
    elif len(r) == 1 and r[0].endswith('.sp') and Path(r[0]).exists():
        cmd, tail = 'run-file', r
    else:
        cmd, tail = 'run-dev', r

    cli.main(args=[*g, cmd, *tail], prog_name='sprig')


if __name__ == "__main__":
    main()
