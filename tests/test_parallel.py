import threading
import time

import pytest

from goodgit.parallel import run_parallel


def test_results_in_submission_order():
    def make(i):
        def f():
            # later thunks finish first
            time.sleep(0.01 * (5 - i))
            return i
        return f

    assert run_parallel([make(i) for i in range(5)], max_workers=5) == [0, 1, 2, 3, 4]


def test_runs_on_worker_threads():
    main_ident = threading.get_ident()
    idents = run_parallel([threading.get_ident for _ in range(4)], max_workers=2)
    assert all(i != main_ident for i in idents)


def test_errors_propagate():
    def boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        run_parallel([lambda: 1, boom])
