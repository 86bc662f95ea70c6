from pytest import Item, fixture

from scicalc.machine import Machine


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Echo each passing assertion with its rewritten explanation.

    Shows which key sequences and displays a test went through; see them with
    pytest -rP.
    '''
    where = '{}:{}'.format(item.nodeid, lineno)
    # The last two explanation lines are pytest's diff hint.
    explanation = str(expl).splitlines()[:-2]
    # Report sections rather than stdout, so capsys tests don't capture them.
    lines = ['{} asserted {}'.format(where, orig)]
    lines += ['{}   {}'.format(where, line) for line in explanation]
    item.add_report_section('call', 'assertions', '\n'.join(lines) + '\n')


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def press(machine: Machine):
    '''
    Press keys on the machine fixture, returning the final display.

    A key is a single character unless separated by spaces: press('12 + 3 =').
    '''
    def press(keys: str) -> str:
        display = machine.get_display_string()
        for group in keys.split(' '):
            if group in Machine.keys() or len(group) <= 1:
                display = machine.submit_token(group)
            else:
                for key in group:
                    display = machine.submit_token(key)
        return display
    return press
