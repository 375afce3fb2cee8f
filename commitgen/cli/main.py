"""CLI Main Entry Point"""

import sys

from commitgen.cli.args import parse_args
from commitgen.cli.commands import display_config, run_install_completion
from commitgen.cli.confirm import Confirmer, State
from commitgen.cli.refine import refine_message
from commitgen.config import Config, load_config
from commitgen.git import GitAnalyzer, GitError, NoStagedChangesError, StagedChanges
from commitgen.lang import Language, message as msg, select_language
from commitgen.llm import CommitMessageGenerator, LLMError
from commitgen.output import Spinner, bold, dim, info, print_error, print_success, print_warning, warning


def _print_header(lang: Language) -> None:
    print(bold(msg(lang, 'title')))
    print(info(msg(lang, 'language')))


def _collect_changes(config: Config, lang: Language):
    """Read staged changes from git.

    Returns:
        tuple: (analyzer, changes), or (None, None) after printing the error
    """
    try:
        analyzer = GitAnalyzer()
        changes = analyzer.get_staged_changes(config.max_diff_chars)
    except NoStagedChangesError:
        print_error(msg(lang, 'no_staged'))
        return None, None
    except GitError as e:
        print_error(msg(lang, 'git_failed', error=e))
        return None, None
    return analyzer, changes


def _warn_fallback(lang: Language, failed, error, next_client) -> None:
    print_warning(msg(lang, 'backend_failed', backend=failed.name, error=error))
    print_warning(msg(lang, 'switching', backend=next_client.name))


def _make_generator(config: Config, lang: Language) -> CommitMessageGenerator:
    def on_fallback(failed, error, next_client):
        _warn_fallback(lang, failed, error, next_client)

    return CommitMessageGenerator.from_config(config, on_fallback=on_fallback)


def _draft_message(generator: CommitMessageGenerator, changes: StagedChanges, config: Config, lang: Language):
    """Draft the first message; None after printing why it failed."""
    spinner = Spinner(msg(lang, 'generating', backend=generator.clients[0].name))

    def on_fallback(failed, error, next_client):
        _warn_fallback(lang, failed, error, next_client)
        spinner.label = msg(lang, 'generating', backend=next_client.name)

    previous_hook, generator.on_fallback = generator.on_fallback, on_fallback
    try:
        with spinner:
            return generator.draft(changes.status, changes.diff, lang, config.max_diff_chars)
    except LLMError as e:
        print_error(msg(lang, 'all_failed', error=e))
        return None
    finally:
        generator.on_fallback = previous_hook


def _print_verbose_stats(args, generator: CommitMessageGenerator, changes: StagedChanges, config: Config) -> None:
    """Print prompt size, token usage and the backend that answered."""
    client = generator.last_client
    if not args.verbose or client is None:
        return
    prompt, response = client.last_prompt, client.last_response
    print()
    print(dim(f"  Prompt: ~{len(prompt)//4} tokens ({len(prompt)} chars)"))
    print(dim(f"  Diff: {len(changes.diff)} chars (budget {config.max_diff_chars})"))
    if response is not None:
        if response.tokens_used:
            print(dim(f"  Response: {response.tokens_used} tokens"))
        else:
            print(dim(f"  Response: {len(response.content)} chars"))
    backend = f"{client.name} [{response.model}]" if response is not None and response.model else client.name
    print(dim(f"  Backend: {backend}"))


def _commit_flow(args, config: Config, lang: Language) -> int:
    """Collect, draft, confirm/refine, commit.

    Returns:
        int: Exit code
    """
    _print_header(lang)

    analyzer, changes = _collect_changes(config, lang)
    if changes is None:
        return 1

    generator = _make_generator(config, lang)
    if not generator.has_backend:
        print_error(msg(lang, 'no_backend'))
        print(msg(lang, 'no_backend_hint'), file=sys.stderr)
        return 1

    message = _draft_message(generator, changes, config, lang)
    if message is None:
        return 1
    _print_verbose_stats(args, generator, changes, config)

    confirmer = Confirmer(lang)
    while True:
        state = confirmer.confirm(message)
        if state is State.ACCEPTED:
            break
        if state is State.REJECTED:
            print(warning(msg(lang, 'cancelled')))
            return 0
        message = refine_message(message, lang, generator)

    try:
        analyzer.commit(message)
    except GitError as e:
        print_error(msg(lang, 'commit_failed', error=e))
        return 1

    print()
    print_success(msg(lang, 'commit_done'))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.install_completion:
        return run_install_completion()
    if args.display_config:
        return display_config()

    config = load_config()
    if args.model:
        config.model = args.model
    lang = select_language(args.lang)

    try:
        return _commit_flow(args, config, lang)
    except KeyboardInterrupt:
        print(f"\n{warning(msg(lang, 'interrupted'))}")
        return 0
    except Exception as e:
        print_error(msg(lang, 'critical', error=e))
        return 1
