"""STRATA test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real SQLite databases, migrations and the composition root.
- functional/   : The CLI driven through Click's test runner.
- contract/     : Port behavior every adapter must share (in-memory and SQLAlchemy).
- fixtures/     : Database fixtures registered as a pytest plugin.
- helpers/      : An example domain and message set shared by the tests (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer in-memory adapters over mocks.
- Async tests run on pytest-asyncio in strict mode; never run migrations on the
  test's own event loop (see `tests.fixtures.sqlite.migrate_async`).
- Property-based tests use hypothesis and live with the layer they exercise.
"""
