from os import isatty
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging
import shlex

from prompt_toolkit import PromptSession

from .util import CalcError
from .machine import Machine
from .lexer import Lexer
from .functions import AngleMode
from .bitwise import NumberBase
from .formatter import DisplayFormat


class InteractiveInput:
    '''
    Lines typed at a prompt, with the calculator's mode flags underneath.
    '''

    def __init__(self, prompt, machine):
        self.prompt = prompt
        self.machine = machine

    def status(self):
        '''
        Toolbar text: angle mode, base, notation, then M and E indicators.
        '''
        flags = self.machine.get_status_flags()
        return ' '.join([flags.angle_mode.value,
                         flags.number_base.name,
                         flags.display_format.value,
                         'M' if flags.memory else ' ',
                         'E' if flags.error else ' '])

    def __iter__(self):
        session = PromptSession(message=self.prompt,
                                vi_mode=True,
                                enable_suspend=True,
                                history=None,
                                bottom_toolbar=self.status,
                                prompt_continuation=' ' * len(self.prompt),
                                erase_when_done=False)
        try:
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Console front end to the calculator engine.

    Lines are infix expressions; a line starting with KEYS_PREFIX is instead a
    shell-quoted list of key names, pressed in order. The display is printed
    after each line.
    '''

    DEFAULT_PROMPT = '> '
    KEYS_PREFIX = ':'

    def dumper(self):
        '''
        Print the tokens of each line, one per output line.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(value)>')
        for line in self.args.expressions:
            try:
                tokens = lexer.tokenize(line)
            except CalcError as e:
                print(e.args[0], file=sys.stderr)
                continue
            for token in tokens:
                print(token.kind.name,
                      repr(getattr(token.value, 'value', token.value)),
                      sep='\t')

    def executor(self):
        '''
        Feed each line to the machine and print the resulting display.

        Error displays and rejected keys go to stderr.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            try:
                self.feed(line)
            except CalcError as e:
                # Keys after an unknown one are not pressed.
                print(e.args[0], file=sys.stderr)
                continue
            display = self.machine.get_display_string()
            if self.machine.get_status_flags().error:
                print(display, file=sys.stderr)
            else:
                print(display)

    def feed(self, line):
        '''
        Feed one line to the machine, as an expression or as key presses.
        '''
        if line.startswith(self.KEYS_PREFIX):
            for key in shlex.split(line[len(self.KEYS_PREFIX):]):
                self.machine.submit_token(key)
        else:
            self.machine.evaluate_expression(line)

    def raw_grammar(self):
        '''
        Print the lexer's combined lexeme pattern.
        '''
        print(Lexer.LEXEME)

    def list_keys(self):
        '''
        Print every key name the machine accepts, digits aside.
        '''
        print(*Machine.keys(), sep='\n')

    def _input_lines(self):
        '''
        Where lines come from when no -e was given.

        An interactive session when a prompt was asked for, or when talking
        to a terminal on both ends; plain stdin otherwise, for pipes.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    machine=self.machine)
        return stdin

    def _add_mode_arguments(self, parser):
        parser.add_argument('-r', '--radians',
                            action='store_const',
                            const=AngleMode.RADIANS,
                            dest='angle_mode',
                            help='start in radians instead of degrees')
        parser.add_argument('-b', '--base',
                            choices=[base.name for base in NumberBase],
                            help='start in this number base')
        parser.add_argument('-f', '--format',
                            choices=[display_format.value
                                     for display_format in DisplayFormat],
                            help='start with this display notation')

    def __init__(self):
        '''
        Build the argument parser; nothing runs until run().
        '''
        parser = ArgumentParser(description='Scientific calculator')
        parser.add_argument('-v', '--verbose',
                            action='store_true',
                            help='log machine decisions')
        self._add_mode_arguments(parser)
        sources = parser.add_mutually_exclusive_group()
        sources.add_argument('-e', '--expression',
                             nargs=REMAINDER,
                             dest='expressions',
                             help='lines to run instead of reading input')
        sources.add_argument('-p', '--prompt',
                             nargs=OPTIONAL,
                             const=self.DEFAULT_PROMPT,
                             help='always prompt, with this text')
        actions = parser.add_mutually_exclusive_group()
        for short_, long_, action, help_ in [
                ('-G', '--raw-grammar', self.raw_grammar,
                 'print the lexer grammar'),
                ('-D', '--dump', self.dumper, 'print tokens of each line'),
                ('-K', '--keys', self.list_keys, 'print all key names')]:
            actions.add_argument(short_, long_,
                                 action='store_const',
                                 const=action,
                                 dest='action',
                                 help=help_)
        parser.set_defaults(action=self.executor, expressions=stdin)
        self.argument_parser = parser

    def run(self, *, args=None):
        '''
        Parse args (sys.argv when None), set up the machine and run the
        selected action.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(levelname)s: %(message)s')
        self.machine = Machine(
            angle_mode=self.args.angle_mode,
            number_base=self.args.base and NumberBase[self.args.base],
            display_format=self.args.format and
            DisplayFormat(self.args.format))
        if self.args.action in (self.executor, self.dumper) and \
           self.args.expressions is stdin:
            self.args.expressions = self._input_lines()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)


def main():
    CLI().run()
