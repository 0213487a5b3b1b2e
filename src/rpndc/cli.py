from os import isatty, path
from argparse import (ArgumentParser, RawDescriptionHelpFormatter,
                      REMAINDER, OPTIONAL)
from importlib.metadata import version, PackageNotFoundError
import sys

from prompt_toolkit import PromptSession

from .machine import Machine, Status
from .lexer import Lexer


def _version():
    try:
        return version('rpndc')
    except PackageNotFoundError:
        return 'unknown'


class InteractiveInput:
    '''
    Line source reading from the terminal, one prompt per line, until EOF.
    '''

    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        session = PromptSession(message=self.prompt, enable_suspend=True)
        while True:
            try:
                yield session.prompt()
            except EOFError:
                return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all tokens, their classification and arity.
        '''
        machine = Machine(prog=self.prog)
        lexer = Lexer()
        print('<kind>\t<repr(token)>\t<class>\t<arity>')
        for line in self.args.expressions:
            for groups in lexer.lex(line):
                (kind, token), = groups.items()
                if machine.isstackable(groups):
                    print(kind, repr(token), sep='\t')
                else:
                    print(kind,
                          repr(token),
                          machine.classify(token),
                          machine.arity(token),
                          sep='\t')
        return 0

    def executor(self):
        '''
        Run machine (RPN calculator) until quit or end of input.
        '''
        machine = Machine(prog=self.prog, verbose=self.args.verbose)
        for line in self.args.expressions:
            if machine.evaluate(line) is Status.HALT:
                break
        return 0

    def raw_grammar(self):
        '''
        Print the numeric literal grammar.
        '''
        print(Lexer.NUMBER)
        return 0

    def _prompting_input(self):
        '''
        Return the line source: the terminal when --prompt is given or both
        stdin and stdout are ttys, plain stdin otherwise.
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    @staticmethod
    def operator_table():
        '''
        Render every implemented operator with its one-line description.
        '''
        lines = ['operators:']
        for char, ref in Machine.OPERATORS.items():
            lines.append('  {}  {}'.format(char, ref.__doc__.strip()))
        lines.append('unimplemented: ' +
                     ' '.join(sorted(Machine.UNIMPLEMENTED)))
        return '\n'.join(lines)

    def __init__(self, prog=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.prog = prog or path.basename(sys.argv[0]) or Machine.DEFAULT_PROG
        self.argument_parser = ArgumentParser(
            prog=self.prog,
            description='dc-style RPN calculator',
            epilog=self.operator_table(),
            formatter_class=RawDescriptionHelpFormatter)
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('--version',
                                          action='version',
                                          version='%(prog)s ' + _version())
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1


def main():
    sys.exit(CLI().run())
