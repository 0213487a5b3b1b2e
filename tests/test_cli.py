'''
Command line interface tests

Captured output is read before asserting anything, since the assertion-pass
hook in conftest.py prints to stdout too.
'''

from rpndc.cli import CLI, InteractiveInput

from pytest import raises


def test_expressions(capsys):
    status = CLI(prog='dc').run(args=['-e', '2 3 + p', '4 * p'])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '5\n20\n'


def test_quit_stops_reading(capsys):
    status = CLI(prog='dc').run(args=['-e', '1 p q', '2 p'])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '1\n'


def test_errors_go_to_stderr(capsys):
    status = CLI(prog='dc').run(args=['-e', '1 0 / f'])
    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == '0\n1\n'
    assert captured.err == 'dc: divide by zero\n'


def test_stdin(monkeypatch, capsys):
    class FakeStdin:
        def __init__(self, lines):
            self.lines = lines

        def __iter__(self):
            return iter(self.lines)

        def fileno(self):
            return 0

    monkeypatch.setattr('sys.stdin', FakeStdin(['3 4\n', '* p\n']))
    monkeypatch.setattr('rpndc.cli.isatty', lambda fd: False)
    status = CLI(prog='dc').run(args=[])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '12\n'


def test_dump(capsys):
    status = CLI(prog='dc').run(args=['-D', '-e', '1.5 +x@'])
    lines = capsys.readouterr().out.splitlines()
    assert status == 0
    assert lines[1:] == ["number\t'1.5'",
                         "operator\t'+'\timplemented\t2",
                         "operator\t'x'\tunimplemented\tNone",
                         "operator\t'@'\tunknown\tNone"]


def test_raw_grammar(capsys):
    status = CLI(prog='dc').run(args=['-G', '-e'])
    out = capsys.readouterr().out
    assert status == 0
    assert '[eE]' in out


def test_help_lists_operators(capsys):
    with raises(SystemExit) as info:
        CLI(prog='dc').run(args=['--help'])
    out = capsys.readouterr().out
    assert info.value.code == 0
    assert '~  quotient then remainder of left / right' in out
    assert 'unimplemented:' in out


def test_version(capsys):
    with raises(SystemExit) as info:
        CLI(prog='dc').run(args=['--version'])
    out = capsys.readouterr().out
    assert info.value.code == 0
    assert out.startswith('dc ')


def test_bad_flag(capsys):
    with raises(SystemExit) as info:
        CLI(prog='dc').run(args=['--bogus'])
    err = capsys.readouterr().err
    assert info.value.code == 2
    assert 'dc' in err


class FakeSession:
    def __init__(self, lines, **kwargs):
        self.lines = list(lines)
        self.kwargs = kwargs

    def prompt(self):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def test_interactive_input_stops_at_eof(monkeypatch):
    monkeypatch.setattr('rpndc.cli.PromptSession',
                        lambda **kwargs: FakeSession(['1', '2 +'], **kwargs))
    assert list(InteractiveInput(prompt='> ')) == ['1', '2 +']


def test_prompt_reads_terminal(monkeypatch, capsys):
    monkeypatch.setattr('rpndc.cli.PromptSession',
                        lambda **kwargs: FakeSession(['6 7', '* p'],
                                                     **kwargs))
    status = CLI(prog='dc').run(args=['-p', 'dc> '])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '42\n'
