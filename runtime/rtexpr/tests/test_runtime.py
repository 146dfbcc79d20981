"""
Test suite for the line driver contract, diagnostics and the variable store
"""

import pytest

from rtexpr import (
    E_DIVISION_BY_ZERO, E_LEX_ERROR, E_RUNTIME_ERROR, E_SYNTAX_ERROR,
    Diagnostic, DivisionByZeroError, ExprRuntimeError, ExprSyntaxError, LexError,
    Number, Binary, Runtime, RuntimeConfig, VariableStore,
    evaluate_line, execute,
)


class TestEvaluateLine:
    """evaluate_line returns a value or a diagnostic, never raises"""

    def test_success(self, store):
        result = evaluate_line('2 + 3', store)
        assert result.ok
        assert result.value == 5.0
        assert result.diagnostic is None

    def test_trees(self, store):
        result = evaluate_line('2 + 3', store)
        assert isinstance(result.tree, Binary)
        assert result.optimized == Number(pos=2, value=5.0)

    def test_without_optimizer(self, store):
        result = evaluate_line('2 + 3', store, optimize=False)
        assert result.value == 5.0
        assert result.tree is result.optimized
        assert isinstance(result.optimized, Binary)

    def test_lex_error(self, store):
        result = evaluate_line('1 + $', store)
        assert not result.ok
        assert result.value is None
        assert result.tree is None
        assert result.diagnostic.code == E_LEX_ERROR
        assert result.diagnostic.pos == 4

    def test_lone_hash(self, store):
        result = evaluate_line('#', store)
        assert result.diagnostic.code == E_LEX_ERROR
        assert result.diagnostic.pos == 0

    def test_syntax_error(self, store):
        result = evaluate_line('1 + 2 )', store)
        assert result.diagnostic.code == E_SYNTAX_ERROR
        assert result.diagnostic.pos == 6

    def test_unknown_identifier(self, store):
        result = evaluate_line('foo(1)', store)
        assert result.diagnostic.code == E_SYNTAX_ERROR
        assert result.diagnostic.pos == 0

    @pytest.mark.parametrize('optimize', [True, False])
    def test_division_by_zero(self, store, optimize):
        result = evaluate_line('5 / (1 - 1)', store, optimize=optimize)
        assert result.diagnostic == Diagnostic(code=E_DIVISION_BY_ZERO, message='Division by zero', pos=2)
        assert result.tree is not None

    def test_store_shared_across_lines(self, store):
        evaluate_line('#1 = 3', store)
        assert evaluate_line('#1 * 2', store).value == 6.0

    def test_failed_line_keeps_earlier_writes(self, store):
        result = evaluate_line('(#5 = 1) + 1 / 0', store)
        assert not result.ok
        assert store.get(5) == 1.0


class TestDiagnostic:
    """Test diagnostic rendering"""

    def test_str(self):
        diagnostic = Diagnostic(code=E_SYNTAX_ERROR, message="Unexpected token ')'", pos=6)
        assert str(diagnostic) == "Syntax error at position 6: Unexpected token ')'"

    def test_kind(self):
        assert Diagnostic(code=E_LEX_ERROR, message='x', pos=0).kind == 'Lexical'
        assert Diagnostic(code=E_DIVISION_BY_ZERO, message='x', pos=0).kind == 'Runtime'

    def test_render_caret(self):
        diagnostic = Diagnostic(code=E_SYNTAX_ERROR, message='x', pos=6)
        assert diagnostic.render('1 + 2 )\n') == ['1 + 2 )', '      ^']

    def test_render_keeps_tabs(self):
        diagnostic = Diagnostic(code=E_LEX_ERROR, message='x', pos=2)
        assert diagnostic.render('\t1$') == ['\t1$', '\t ^']

    def test_from_exception(self):
        error = DivisionByZeroError('Division by zero', 2)
        assert str(error) == '[E_DIVISION_BY_ZERO] Division by zero at position 2'
        assert error.to_diagnostic().pos == 2


class TestRuntime:
    """Test the session interface"""

    def test_execute(self, runtime):
        assert runtime.execute('2 + 3 * 4') == 14.0

    def test_execute_raises(self, runtime):
        with pytest.raises(ExprSyntaxError):
            runtime.execute('1 +')
        with pytest.raises(LexError):
            runtime.execute('1 ? 2')
        with pytest.raises(DivisionByZeroError):
            runtime.execute('1 / 0')

    def test_session_variables(self, runtime):
        runtime.execute('#1 = 5')
        assert runtime.execute('#1 * 2') == 10.0
        assert runtime.get_var(1) == 5.0
        assert runtime.get_env() == {1: 5.0}

    def test_set_var(self, runtime):
        runtime.set_var(2, 1.5)
        assert runtime.execute('#2 + 1') == 2.5

    def test_clear_env(self, runtime):
        runtime.execute('#1 = 5')
        runtime.clear_env()
        assert runtime.get_env() == {}
        assert runtime.get_var(1) == 0.0

    def test_evaluate_line(self, runtime, store):
        result = runtime.evaluate_line('#3 = 1')
        assert result.ok
        assert store.get(3) == 1.0

    def test_config_disables_optimizer(self):
        runtime = Runtime(RuntimeConfig(optimize=False))
        result = runtime.evaluate_line('1 + 1')
        assert isinstance(result.optimized, Binary)

    def test_convenience_execute(self):
        assert execute('(2 + 3) * 4') == 20.0


class TestVariableStore:
    """Test the integer-keyed store"""

    def test_unset_is_zero(self, store):
        assert store.get(42) == 0.0
        assert len(store) == 0

    def test_set_returns_float(self, store):
        assert store.set(1, 3) == 3.0
        assert isinstance(store.get(1), float)

    def test_contains_and_iter(self, store):
        store.set(5, 1.0)
        store.set(2, 1.0)
        assert 5 in store
        assert 3 not in store
        assert list(store) == [2, 5]

    def test_update(self, store):
        store.update({1: 1.0, 2: 2.0})
        assert store.snapshot() == {1: 1.0, 2: 2.0}

    def test_snapshot_is_copy(self, store):
        store.set(1, 1.0)
        snapshot = store.snapshot()
        snapshot[1] = 9.0
        assert store.get(1) == 1.0

    def test_initial_values(self):
        assert VariableStore({7: 0.5}).get(7) == 0.5

    @pytest.mark.parametrize('bad_id', [-1, 1.5, '1', True])
    def test_rejects_bad_ids(self, store, bad_id):
        with pytest.raises(ValueError):
            store.set(bad_id, 1.0)

    def test_clear(self, store):
        store.set(1, 1.0)
        store.clear()
        assert len(store) == 0


class TestDeepLines:
    """Long or deeply nested lines give a value or a diagnostic"""

    @pytest.mark.parametrize('optimize', [True, False])
    def test_long_sum(self, store, optimize):
        result = evaluate_line('+'.join(['1'] * 249), store, optimize=optimize)
        assert result.ok
        assert result.value == 249.0

    @pytest.mark.parametrize('optimize', [True, False])
    def test_long_unary_run(self, store, optimize):
        result = evaluate_line('-' * 248 + '1', store, optimize=optimize)
        assert result.ok
        assert result.value == 1.0

    def test_optimized_tree_is_separate(self, store):
        result = evaluate_line('#1 + 2 * 3', store)
        assert result.tree.right == Binary(pos=7, op='*', left=Number(pos=5, value=2.0), right=Number(pos=9, value=3.0))
        assert result.optimized.right == Number(pos=7, value=6.0)

    def test_deep_parentheses(self, store):
        result = evaluate_line('  ' + '(' * 200 + '1' + ')' * 200, store)
        assert result.diagnostic == Diagnostic(code=E_SYNTAX_ERROR, message='Expression nested too deeply', pos=2)
        assert result.tree is None

    @pytest.mark.parametrize('optimize', [True, False])
    def test_sum_deeper_than_stack(self, store, optimize):
        text = '+'.join(['1'] * 4000)
        result = evaluate_line(text, store, optimize=optimize)
        assert result.diagnostic == Diagnostic(
            code=E_RUNTIME_ERROR, message='Expression nested too deeply', pos=len(text) - 2
        )
        assert result.tree is not None

    def test_execute_raises_language_error(self, runtime):
        with pytest.raises(ExprSyntaxError) as exc_info:
            runtime.execute('(' * 200 + '1' + ')' * 200)
        assert exc_info.value.message == 'Expression nested too deeply'
        with pytest.raises(ExprRuntimeError):
            runtime.execute('-' * 4000 + '1')

    def test_session_continues(self, runtime):
        assert not runtime.evaluate_line('(' * 200 + '1' + ')' * 200).ok
        assert runtime.execute('#1 = 2') == 2.0
