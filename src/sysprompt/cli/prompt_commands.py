"""Prompt-building commands: optimize and review."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from sysprompt.config import SyspromptConfig
from sysprompt.output.clipboard import DeliveryMethod, DeliveryResult, OutputError, deliver
from sysprompt.prompts.renderer import (
    CodeSource,
    load_code_file,
    render_prompt,
    render_runtimes,
    render_specs,
)
from sysprompt.prompts.templates import CODE_PLACEHOLDER, PromptKind

console = Console()
err_console = Console(stderr=True)


def _prompt_options(func):
    """Options shared by every prompt command."""
    func = click.option(
        "--print", "print_only", is_flag=True, help="Print the prompt instead of copying it"
    )(func)
    func = click.option(
        "--no-clipboard", is_flag=True, help="Skip the clipboard and save to the output file"
    )(func)
    func = click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Fallback file for the prompt (default: ~/llm-optimize-prompt.txt)",
    )(func)
    func = click.argument(
        "code_file", required=False, type=click.Path(dir_okay=False, path_type=Path)
    )(func)
    return func


def _report_code_source(code: CodeSource, out: Console = console) -> None:
    if code.injected:
        out.print(f"[green]Code file loaded: {escape(str(code.path))}[/green]")
        if code.encoding == "latin-1":
            out.print("[yellow]File is not valid UTF-8; read it as Latin-1.[/yellow]")
    elif code.missing:
        out.print(f"[red]WARNING: File not found: {escape(str(code.path))}[/red]")
        out.print(f"[yellow]The prompt will use {CODE_PLACEHOLDER} as a placeholder.[/yellow]")
        out.print()
    elif code.error:
        out.print(f"[red]WARNING: Could not read {escape(str(code.path))}: {escape(code.error)}[/red]")
        out.print(f"[yellow]The prompt will use {CODE_PLACEHOLDER} as a placeholder.[/yellow]")
        out.print()


def _print_section(title: str, body: str) -> None:
    console.print(f"[cyan]--- {title} ---[/cyan]")
    console.print(body, markup=False, highlight=False)
    console.print()


def _print_summary(
    result: DeliveryResult,
    code: CodeSource,
    specs: Optional[str] = None,
    runtimes: Optional[str] = None,
) -> None:
    """Show where the prompt went and what to do next."""
    console.print()
    console.print("[green]============================================[/green]")
    if result.method == DeliveryMethod.CLIPBOARD:
        console.print("[bold green] PROMPT COPIED TO CLIPBOARD![/bold green]")
    else:
        console.print("[bold green] PROMPT SAVED TO FILE![/bold green]")
    console.print("[green]============================================[/green]")
    console.print()

    if specs is not None:
        _print_section("System Specs", specs)
    if runtimes is not None:
        _print_section("Installed Runtimes", runtimes)

    if code.injected:
        console.print("[cyan]--- Code ---[/cyan]")
        console.print(f"[green]Loaded from: {escape(str(code.path))}[/green]")
        console.print()
        console.print("[green]Your prompt is READY. Paste it directly into your LLM.[/green]")
        return

    console.print("[yellow]--- Next Steps ---[/yellow]")
    if result.method == DeliveryMethod.CLIPBOARD:
        console.print("  1. Paste the prompt into your LLM (Cmd+V / Ctrl+V)")
        console.print(f"  2. Replace {CODE_PLACEHOLDER} with your actual code")
    else:
        console.print(f"  1. Open the saved file: {escape(str(result.path))}")
        console.print("  2. Copy the contents into your LLM")
        console.print(f"  3. Replace {CODE_PLACEHOLDER} with your actual code")
        console.print()
        console.print("[yellow]  TIP: Install xclip for automatic clipboard support:[/yellow]")
        console.print("    sudo apt install xclip")


def _build_and_deliver(
    config: SyspromptConfig,
    kind: PromptKind,
    code_file: Optional[Path],
    output: Optional[Path],
    no_clipboard: bool,
    print_only: bool,
) -> None:
    specs = runtimes = None
    profile = None
    if kind == PromptKind.OPTIMIZE:
        from sysprompt.hardware.profile import collect
        from sysprompt.hardware.runtimes import RUNTIME_CANDIDATES

        if not print_only:
            console.print("\n[cyan]Gathering system information...[/cyan]\n")
        profile = collect(
            timeout=config.probe_timeout,
            runtime_candidates=config.runtime_candidates(RUNTIME_CANDIDATES),
        )
        specs = render_specs(profile)
        runtimes = render_runtimes(profile)

    code = load_code_file(code_file)
    prompt = render_prompt(kind, code, profile)

    if print_only:
        _report_code_source(code, err_console)
        click.echo(prompt)
        return

    _report_code_source(code)

    fallback = (output or config.fallback_path).expanduser()
    try:
        result = deliver(
            prompt,
            fallback_path=fallback,
            use_clipboard=config.use_clipboard and not no_clipboard,
        )
    except OutputError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    _print_summary(result, code, specs, runtimes)
    console.print()


@click.command()
@_prompt_options
@click.pass_obj
def optimize(config, code_file, output, no_clipboard, print_only):
    """Build a prompt to optimize code for this machine.

    CODE_FILE is optional; without it the prompt contains
    PASTE_YOUR_CODE_HERE for you to replace.
    """
    _build_and_deliver(config, PromptKind.OPTIMIZE, code_file, output, no_clipboard, print_only)


@click.command()
@_prompt_options
@click.pass_obj
def review(config, code_file, output, no_clipboard, print_only):
    """Build a code review prompt.

    CODE_FILE is optional; without it the prompt contains
    PASTE_YOUR_CODE_HERE for you to replace.
    """
    _build_and_deliver(config, PromptKind.REVIEW, code_file, output, no_clipboard, print_only)
