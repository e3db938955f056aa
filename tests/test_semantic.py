from front_end import (
	Failure,
	SemanticAnalyzer,
	SemanticSuccess,
	check_semantics,
	tokenize,
)


def semantic(source, dialect="c"):
	return check_semantics(tokenize(source, dialect), dialect)


def messages(diagnostics):
	return [d.message for d in diagnostics]


def test_initialized_unused_variable():
	result = semantic("int x = 5;")
	assert isinstance(result, SemanticSuccess)
	assert result.success
	symbol = result.symbols["global:x"]
	assert (symbol.type_name, symbol.line, symbol.initialized, symbol.used) == ("int", 1, True, False)
	assert messages(result.warnings) == ["Variable 'x' is declared but never used"]


def test_duplicate_variable():
	result = semantic("int x; int x;")
	assert isinstance(result, Failure)
	assert messages(result.errors) == ["Variable 'x' is already declared in this scope"]


def test_undeclared_assignment_target():
	result = semantic("y = 3;")
	assert not result.success
	assert messages(result.errors) == ["Variable 'y' is not declared"]


def test_float_to_int_narrowing_is_a_warning():
	result = semantic("int x = 5.5;")
	assert result.success
	narrowing = [m for m in messages(result.warnings) if "Implicit conversion" in m]
	assert narrowing == ["Implicit conversion from float to int for variable 'x'"]


def test_char_into_int_is_an_error():
	result = semantic("char c = 'a';\nint n = 'b';")
	assert not result.success
	assert messages(result.errors) == ["Type mismatch: Cannot assign char to int variable 'n'"]
	assert result.errors[0].line == 2
	# Warnings are still reported beside errors.
	assert "Variable 'c' is declared but never used" in messages(result.warnings)


def test_string_literal_assignment():
	result = semantic('int n = "hi";')
	assert result.success
	assert "Assigning string literal to int variable 'n'" in messages(result.warnings)

	java = semantic('String s = "hi";', "java")
	assert java.success
	assert not any("string literal" in m for m in messages(java.warnings))


def test_identifier_on_right_hand_side_marks_use():
	result = semantic("int a = 1;\nint b = a;")
	assert result.success
	assert result.symbols["global:a"].used
	assert not result.symbols["global:b"].used
	assert messages(result.warnings) == ["Variable 'b' is declared but never used"]


def test_plain_reference_marks_use():
	result = semantic("int x;")
	assert result.success
	assert result.symbols["global:x"].used
	assert not result.symbols["global:x"].initialized
	assert result.warnings == []


def test_later_assignment_initializes():
	result = semantic("int total;\ntotal = 4;")
	assert result.success
	assert result.symbols["global:total"].initialized


def test_undeclared_in_expression():
	result = semantic("int x = y + 1;")
	assert messages(result.errors) == ["Variable 'y' is not declared"]


def test_functions_are_registered_and_marked_used():
	result = semantic("void greet() { }\nint helper() { greet(); return 0; }")
	assert result.success
	assert result.functions["greet"].used
	# A declaration header `name(` also counts as a call site.
	assert result.functions["helper"].used
	assert result.functions["helper"].return_type == "int"
	assert result.functions["helper"].line == 2


def test_function_parameters_are_recorded():
	result = semantic("int add(int a, int b);")
	assert result.success
	assert result.functions["add"].parameters == [("int", "a"), ("int", "b")]
	assert result.symbols == {}


def test_duplicate_function():
	result = semantic("void f() { }\nvoid f() { }")
	assert messages(result.errors) == ["Function 'f' is already declared"]
	assert result.errors[0].line == 2


def test_undeclared_function():
	result = semantic("foo();")
	assert messages(result.errors) == ["Function 'foo' is not declared"]


def test_c_headers_and_library_calls():
	result = semantic('#include <stdio.h>\nint main() {\n  printf("hi");\n  return 0;\n}')
	assert result.success
	assert result.symbols == {}


def test_java_imports_and_qualified_calls():
	source = "import java.util.List;\nint x = 1;\nSystem.out.println(x);"
	result = semantic(source, "java")
	assert result.success
	assert result.symbols["global:x"].used
	assert result.warnings == []


def test_builtins_are_not_reported():
	result = semantic("int n = length(items2);", "java")
	assert messages(result.errors) == ["Variable 'items2' is not declared"]


def test_rerun_is_idempotent():
	analyzer = SemanticAnalyzer(tokenize("int x; int x; y = 2;"))
	first = analyzer.analyze()
	second = analyzer.analyze()
	assert first == second
	assert len(second.errors) == 2


def test_result_snapshot_is_independent_of_later_runs():
	analyzer = SemanticAnalyzer(tokenize("int x = 1;"))
	first = analyzer.analyze()
	analyzer.symbols["global:x"].used = True
	assert not first.symbols["global:x"].used
