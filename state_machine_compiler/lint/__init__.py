from state_machine_compiler.lint.asl import LintError, LintResult, lint_definition

__all__ = ["LintError", "LintResult", "lint_definition"]
