import io

from packages.solvers import ConsoleReporter, RecordingReporter, create_solver
from packages.oracle import SecretOracle


def test_console_reporter_verbose_and_quiet():
    loud, quiet = io.StringIO(), io.StringIO()
    for stream, verbose in ((loud, True), (quiet, False)):
        solver = create_solver("adaptive")
        solver.reset(SecretOracle("BAC"), reporter=ConsoleReporter(stream, verbose=verbose))
        solver.run()
    assert 'GUESS#1 : "B" -> -2' in loud.getvalue()
    assert "GUESS#" not in quiet.getvalue()
    assert "== done: BAC" in quiet.getvalue()
    assert "== profile" in quiet.getvalue()


def test_recording_reporter_counts_queries():
    rec = RecordingReporter()
    solver = create_solver("adaptive")
    solver.reset(SecretOracle("XIXU"), reporter=rec)
    res = solver.run()
    assert len(rec.of("query")) == res.queries
    assert [q["index"] for q in rec.of("query")] == list(range(1, res.queries + 1))
