'''
Error taxonomy and reporting tests
'''

from io import StringIO

from rpndc.util import (RPNError, RPNArithmeticError, DivideByZeroError,
                        ParserError, FloatParseError, BadCharacterError,
                        StackError, FewElementsError,
                        UnimplementedFeatureError, Reporter, wrap_user_errors)

from pytest import raises, mark


@mark.parametrize('error, kind, message', [
    (DivideByZeroError(), RPNArithmeticError, 'divide by zero'),
    (FloatParseError('1..'), ParserError, "cannot parse number '1..'"),
    (BadCharacterError('\t'), ParserError, "'\\t' (011) unknown character"),
    (FewElementsError(1, 0), StackError, 'stack empty'),
    (FewElementsError(2, 1), StackError,
     'stack has 1 element(s), needs 2'),
    (UnimplementedFeatureError('x'), RPNError, "'x' (0170) unimplemented"),
])
def test_messages(error, kind, message):
    assert isinstance(error, kind)
    assert str(error) == message


def test_wrap_user_errors_converts():
    @wrap_user_errors(FloatParseError)
    def convert(text):
        return float(text)

    with raises(FloatParseError) as info:
        convert('x')
    assert info.value.text == 'x'
    assert isinstance(info.value.__cause__, ValueError)


def test_wrap_user_errors_passes_rpn_errors():
    @wrap_user_errors(FloatParseError)
    def fail(text):
        raise DivideByZeroError()

    with raises(DivideByZeroError):
        fail('1')


def test_reporter_prefix():
    sink = StringIO()
    Reporter('dc', file=sink).report(DivideByZeroError())
    assert sink.getvalue() == 'dc: divide by zero\n'
