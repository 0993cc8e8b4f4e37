"""COREBRIDGE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Boundary guarantees every engine relies on (exactly-once init,
                  concurrent calls, fatal aborts).
- functional/   : CLI commands exercised through Click's test runner.
- e2e/          : Top-level CLI options, logging and flight recorder.
- helpers/      : Shared utilities (no tests here).

General guidance
- Keep unit fast and deterministic; prefer fakes over mocks at boundaries.
- Tests touching the entry points use the `fresh_boundary` fixture so the
  process-wide engine never leaks between tests.
"""
