"""
Tests for the interactive CLI: confirmation, raw terminal mode, feedback
editing, message display and the end-to-end main() flow.

Run with:
    pytest tests/test_cli.py -v
    pytest tests/test_cli.py -v -s   # see actual terminal output
"""

import io
import os
import re

import pytest

import commitgen.cli.confirm as confirm
from commitgen.cli.confirm import Confirmer, State, next_state, raw_mode
from commitgen.cli.main import main
from commitgen.cli.refine import refine_message
from commitgen.config import Config
from commitgen.git import GitError, NoStagedChangesError, StagedChanges
from commitgen.lang import Language
from commitgen.llm import CommitMessageGenerator, LLMClient, LLMError, LLMResponse
from commitgen.output import display_message

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


class FakeClient(LLMClient):
    def __init__(self, replies, label="fake"):
        self.replies = list(replies)
        self.label = label
        self.prompts = []

    @property
    def name(self):
        return self.label

    def generate(self, prompt, max_tokens=None):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply)


class FakeAnalyzer:
    """Stands in for GitAnalyzer; records commits."""

    status = "1 file changed"
    diff = "+added x"
    error = None
    commit_error = None
    commits = []

    def get_staged_changes(self, max_chars):
        if self.error:
            raise self.error
        return StagedChanges(status=self.status, diff=self.diff[:max_chars])

    def commit(self, message):
        if self.commit_error:
            raise self.commit_error
        FakeAnalyzer.commits.append(message)


@pytest.fixture
def strip_ansi():
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a queue of answers."""
    def _feed(*answers):
        queue = list(answers)
        asked = []

        def _input(prompt=""):
            asked.append(prompt)
            answer = queue.pop(0)
            if isinstance(answer, BaseException):
                raise answer
            return answer

        monkeypatch.setattr("builtins.input", _input)
        return asked
    return _feed


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class TestNextState:
    """next_state() transition table."""

    @pytest.mark.parametrize("key", ['\r', '\n', 'y', 'Y', 'yes', 'т', 'Т', 'так'])
    def test_accept(self, key):
        assert next_state(key) is State.ACCEPTED

    @pytest.mark.parametrize("key", ['e', 'E', 'edit', 'е', 'редагувати'])
    def test_edit(self, key):
        assert next_state(key) is State.EDIT_REQUESTED

    @pytest.mark.parametrize("key", ['n', 'N', 'no', 'н', 'ні', '\x1b'])
    def test_reject(self, key):
        assert next_state(key) is State.REJECTED

    @pytest.mark.parametrize("key", ['x', '1', ' ', '\x1b[A', 'maybe'])
    def test_other_keys_keep_waiting(self, key):
        assert next_state(key) is State.AWAITING_INPUT


# ---------------------------------------------------------------------------
# Confirmer
# ---------------------------------------------------------------------------

class TestConfirmer:
    """Confirmer.ask() on line-buffered (non-tty) input."""

    @pytest.mark.parametrize("data", ["\r", "\n", "y\n", "так\n", "т"])
    def test_accept(self, data):
        assert Confirmer(Language.UA, stdin=io.StringIO(data)).ask() is State.ACCEPTED

    @pytest.mark.parametrize("data", ["\x1b", "ні\n", "n\n"])
    def test_reject(self, data):
        assert Confirmer(Language.EN, stdin=io.StringIO(data)).ask() is State.REJECTED

    @pytest.mark.parametrize("data", ["e\n", "е\n", "edit\n"])
    def test_edit(self, data):
        assert Confirmer(Language.EN, stdin=io.StringIO(data)).ask() is State.EDIT_REQUESTED

    def test_ignores_unknown_until_decision(self):
        stdin = io.StringIO("x\nmaybe\ne\n")
        assert Confirmer(Language.EN, stdin=stdin).ask() is State.EDIT_REQUESTED

    def test_end_of_input_rejects(self):
        assert Confirmer(Language.EN, stdin=io.StringIO("what\n")).ask() is State.REJECTED

    def test_interrupt_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            Confirmer(Language.EN, stdin=io.StringIO("\x03")).ask()
        assert exc.value.code == 0
        assert "Cancelled (Ctrl+C)" in capsys.readouterr().out

    def test_render(self, capsys, strip_ansi):
        Confirmer(Language.EN, stdin=io.StringIO("")).render("feat(auth): added login flow")
        out = strip_ansi(capsys.readouterr().out)
        assert "Generated commit message:" in out
        assert "feat(auth): added login flow" in out
        assert "Enter/y - yes" in out
        assert "e - edit" in out
        assert "n/Esc - cancel" in out


class FakeTTY:
    def isatty(self):
        return True

    def fileno(self):
        return 99


@pytest.fixture
def fake_termios(monkeypatch):
    """Record raw-mode switches instead of touching a real terminal."""
    events = []
    monkeypatch.setattr(confirm.termios, "tcgetattr", lambda fd: ["saved", fd])
    monkeypatch.setattr(confirm.termios, "tcsetattr", lambda fd, when, attrs: events.append(("restore", fd, attrs)))
    monkeypatch.setattr(confirm.tty, "setraw", lambda fd: events.append(("raw", fd)))
    return events


class TestRawMode:
    """raw_mode() acquisition and release."""

    def test_non_tty_untouched(self, fake_termios):
        with raw_mode(io.StringIO()) as raw:
            assert raw is False
        assert fake_termios == []

    def test_restores_after_block(self, fake_termios):
        with raw_mode(FakeTTY()) as raw:
            assert raw is True
            assert fake_termios == [("raw", 99)]
        assert fake_termios[-1] == ("restore", 99, ["saved", 99])

    def test_restores_on_exit(self, fake_termios):
        with pytest.raises(SystemExit):
            with raw_mode(FakeTTY()):
                raise SystemExit(0)
        assert fake_termios[-1] == ("restore", 99, ["saved", 99])

    @pytest.mark.parametrize("keys, expected", [
        (['\r'], State.ACCEPTED),
        (['q', 'y'], State.ACCEPTED),
        (['\x1b'], State.REJECTED),
        (['е'], State.EDIT_REQUESTED),
    ])
    def test_confirmer_in_raw_mode(self, monkeypatch, fake_termios, keys, expected):
        queue = list(keys)
        monkeypatch.setattr(Confirmer, "_read_raw_key", lambda self: queue.pop(0))
        assert Confirmer(Language.EN, stdin=FakeTTY()).ask() is expected
        assert fake_termios == [("raw", 99), ("restore", 99, ["saved", 99])]

    def test_interrupt_restores_before_exit(self, monkeypatch, fake_termios):
        monkeypatch.setattr(Confirmer, "_read_raw_key", lambda self: '\x03')
        with pytest.raises(SystemExit) as exc:
            Confirmer(Language.EN, stdin=FakeTTY()).ask()
        assert exc.value.code == 0
        assert fake_termios[-1] == ("restore", 99, ["saved", 99])

    @pytest.mark.parametrize("data, expected", [
        ("т".encode('utf-8'), State.ACCEPTED),
        (b"\r", State.ACCEPTED),
        ("н".encode('utf-8'), State.REJECTED),
        (b"\x1b", State.REJECTED),
        (b"", State.REJECTED),
    ])
    def test_reads_bytes_from_descriptor(self, fake_termios, data, expected):
        read_fd, write_fd = os.pipe()

        class PipeTTY(FakeTTY):
            def fileno(self):
                return read_fd

        try:
            os.write(write_fd, data)
            os.close(write_fd)
            write_fd = None
            assert Confirmer(Language.UA, stdin=PipeTTY()).ask() is expected
        finally:
            os.close(read_fd)
            if write_fd is not None:
                os.close(write_fd)
        assert fake_termios == [("raw", read_fd), ("restore", read_fd, ["saved", read_fd])]


# ---------------------------------------------------------------------------
# Feedback editing
# ---------------------------------------------------------------------------

class TestRefineMessage:
    """refine_message() outcomes."""

    def test_empty_feedback_keeps_message(self, feed_input):
        client = FakeClient([])
        original = 'fix(api): fixed "quoted" bug '
        feed_input("   ")
        assert refine_message(original, Language.EN, CommitMessageGenerator([client])) == original
        assert client.prompts == []

    def test_feedback_makes_one_call(self, feed_input):
        client = FakeClient(["feat(api): added pagination"])
        asked = feed_input("mention pagination")
        result = refine_message("feat: added list", Language.EN, CommitMessageGenerator([client]))
        assert result == "feat(api): added pagination"
        assert len(client.prompts) == 1
        assert "Feedback: mention pagination" in client.prompts[0]
        assert asked == ["What to fix? (Enter - keep as is): "]

    def test_manual_entry_without_backend(self, feed_input):
        asked = feed_input("shorter", "  docs: updated readme ")
        result = refine_message("docs: x", Language.UA, CommitMessageGenerator([]))
        assert result == "docs: updated readme"
        assert asked[1] == "Новий message: "

    def test_blank_manual_entry_keeps_message(self, feed_input):
        feed_input("shorter", "")
        assert refine_message("docs: x", Language.EN, CommitMessageGenerator([])) == "docs: x"

    def test_backend_failure_keeps_message(self, feed_input, capsys):
        feed_input("shorter")
        generator = CommitMessageGenerator([FakeClient([LLMError("offline")])])
        assert refine_message("docs: x", Language.EN, generator) == "docs: x"
        assert "Refining failed: offline" in capsys.readouterr().err

    def test_ctrl_c_at_feedback_keeps_message(self, feed_input):
        feed_input(KeyboardInterrupt())
        assert refine_message("docs: x", Language.EN, CommitMessageGenerator([])) == "docs: x"


# ---------------------------------------------------------------------------
# Message display
# ---------------------------------------------------------------------------

class TestDisplayMessage:
    def test_rules_and_message(self, capsys, strip_ansi):
        display_message("refactor(store): optimized cart state management")
        lines = strip_ansi(capsys.readouterr().out).strip('\n').split('\n')
        assert lines[1] == "refactor(store): optimized cart state management"
        assert set(lines[0]) <= {'─', '-'}
        assert len(lines[0]) == len(lines[1])


# ---------------------------------------------------------------------------
# main() end to end
# ---------------------------------------------------------------------------

@pytest.fixture
def app(monkeypatch):
    """Wire main() to a fake repository and fake backends."""
    FakeAnalyzer.commits = []
    FakeAnalyzer.error = None
    FakeAnalyzer.commit_error = None
    monkeypatch.delenv("COMMIT_LANG", raising=False)
    monkeypatch.setattr("commitgen.cli.main.GitAnalyzer", FakeAnalyzer)
    monkeypatch.setattr("commitgen.cli.main.load_config", lambda: Config())

    def _setup(clients=None, keys="y\n"):
        if clients is not None:
            monkeypatch.setattr("commitgen.llm.generator.available_clients", lambda config: clients)
        monkeypatch.setattr("sys.stdin", io.StringIO(keys))
    return _setup


class TestMain:
    """main() exit codes and side effects."""

    def test_accept_commits(self, app, capsys):
        client = FakeClient(["Sure! feat(auth): added login flow"])
        app([client], keys="\r")
        assert main([]) == 0
        assert FakeAnalyzer.commits == ["feat(auth): added login flow"]
        assert "Commit created successfully!" in capsys.readouterr().out

    def test_prompt_gets_status_and_diff(self, app):
        client = FakeClient(["fix: fixed x"])
        app([client])
        main([])
        assert "1 file changed" in client.prompts[0]
        assert "+added x" in client.prompts[0]

    def test_no_backend(self, app, monkeypatch, capsys):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.setattr("commitgen.llm.claude_cli.shutil.which", lambda name: None)
        app()
        assert main([]) == 1
        assert FakeAnalyzer.commits == []
        assert "No way to generate a commit message found" in capsys.readouterr().err

    def test_no_staged_changes_skips_generation(self, app, capsys):
        client = FakeClient([])
        app([client])
        FakeAnalyzer.error = NoStagedChangesError("No staged changes")
        assert main(["--lang=ua"]) == 1
        assert client.prompts == []
        assert "Немає staged changes" in capsys.readouterr().err

    def test_git_failure(self, app, capsys):
        app([FakeClient([])])
        FakeAnalyzer.error = GitError("Not inside a git repository")
        assert main([]) == 1
        assert "Not inside a git repository" in capsys.readouterr().err

    def test_reject_exits_zero_without_commit(self, app, capsys):
        app([FakeClient(["feat: added x"])], keys="n\n")
        assert main([]) == 0
        assert FakeAnalyzer.commits == []
        assert "Commit cancelled" in capsys.readouterr().out

    def test_interrupt_exits_zero(self, app, capsys):
        app([FakeClient(["feat: added x"])], keys="\x03")
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert out.count("Confirm and commit?") == 1
        assert FakeAnalyzer.commits == []

    def test_edit_loop(self, app, feed_input):
        client = FakeClient(["feat: added x", "feat(core): added x"])
        app([client], keys="e\ny\n")
        feed_input("add a scope")
        assert main([]) == 0
        assert len(client.prompts) == 2
        assert FakeAnalyzer.commits == ["feat(core): added x"]

    def test_edit_with_empty_feedback(self, app, feed_input):
        client = FakeClient(["feat: added x"])
        app([client], keys="e\ny\n")
        feed_input("")
        assert main([]) == 0
        assert len(client.prompts) == 1
        assert FakeAnalyzer.commits == ["feat: added x"]

    def test_fallback_to_second_backend(self, app, capsys):
        api = FakeClient([LLMError("overloaded")], label="Claude API")
        cli = FakeClient(["perf(db): optimized query"], label="Claude Code CLI")
        app([api, cli])
        assert main([]) == 0
        assert FakeAnalyzer.commits == ["perf(db): optimized query"]
        err = capsys.readouterr().err
        assert "Claude API unavailable: overloaded" in err
        assert "Switching to Claude Code CLI..." in err

    def test_all_backends_fail(self, app):
        app([FakeClient([LLMError("a")]), FakeClient([LLMError("b")])])
        assert main([]) == 1
        assert FakeAnalyzer.commits == []

    def test_commit_failure(self, app, capsys):
        app([FakeClient(["feat: added x"])])
        FakeAnalyzer.commit_error = GitError("git commit exited with code 1")
        assert main([]) == 1
        assert "Failed to create commit" in capsys.readouterr().err

    def test_unexpected_error(self, app, capsys):
        class Broken(FakeClient):
            def generate(self, prompt, max_tokens=None):
                raise RuntimeError("kaboom")

        app([Broken([])])
        assert main([]) == 1
        assert "Critical error: kaboom" in capsys.readouterr().err

    def test_env_language_beats_flag(self, app, monkeypatch, capsys):
        client = FakeClient(["feat: додано x"])
        app([client])
        monkeypatch.setenv("COMMIT_LANG", "UA")
        main(["--lang=EN"])
        assert "Мова: Українська" in capsys.readouterr().out
        assert "Проаналізуй" in client.prompts[0]

    def test_verbose(self, app, capsys):
        class Counting(FakeClient):
            def generate(self, prompt, max_tokens=None):
                response = super().generate(prompt, max_tokens)
                return LLMResponse(content=response.content, model="claude-test", tokens_used=321)

        client = Counting(["feat: added x"], label="Claude API")
        app([client])
        main(["--verbose"])
        out = capsys.readouterr().out
        assert f"Prompt: ~{len(client.prompts[0]) // 4} tokens ({len(client.prompts[0])} chars)" in out
        assert "Response: 321 tokens" in out
        assert "Diff: 8 chars (budget 6000)" in out
        assert "Backend: Claude API [claude-test]" in out

    def test_verbose_without_token_counts(self, app, capsys):
        app([FakeClient(["feat: added x"], label="Claude Code CLI")])
        main(["--verbose"])
        out = capsys.readouterr().out
        assert "Response: 13 chars" in out
        assert "Backend: Claude Code CLI" in out

    def test_spinner_label_follows_fallback(self, app, monkeypatch):
        labels = []

        class RecordingSpinner:
            def __init__(self, label=""):
                self.label = label

            def __enter__(self):
                labels.append(self.label)
                return self

            def __exit__(self, *args):
                labels.append(self.label)

        monkeypatch.setattr("commitgen.cli.main.Spinner", RecordingSpinner)
        api = FakeClient([LLMError("overloaded")], label="Claude API")
        cli = FakeClient(["perf(db): optimized query"], label="Claude Code CLI")
        app([api, cli])
        assert main([]) == 0
        assert labels == [
            "Generating commit message via Claude API...",
            "Generating commit message via Claude Code CLI...",
        ]


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

class TestSubcommands:
    def test_install_completion(self, monkeypatch, capsys):
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert main(["--install-completion"]) == 0
        out = capsys.readouterr().out
        assert 'eval "$(register-python-argcomplete commitgen)"' in out
        assert ".zshrc" in out

    def test_display_config(self, monkeypatch, capsys, strip_ansi):
        monkeypatch.setattr("commitgen.cli.commands.load_config", lambda: Config(max_diff_chars=4000))
        monkeypatch.setattr("commitgen.cli.commands.get_config_path", lambda: None)
        monkeypatch.setattr("commitgen.cli.commands.available_clients", lambda config: [FakeClient([], label="Claude Code CLI")])
        assert main(["--display-config"]) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "max_diff_chars: 4000" in out
        assert "Claude Code CLI" in out
        assert "no .commitgenrc found" in out

    def test_model_flag_overrides_config(self, app, monkeypatch):
        seen = {}

        def _clients(config):
            seen['model'] = config.model
            return [FakeClient(["feat: added x"])]

        app()
        monkeypatch.setattr("commitgen.llm.generator.available_clients", _clients)
        main(["--model", "claude-opus"])
        assert seen['model'] == "claude-opus"
