from concurrent.futures import ThreadPoolExecutor

import pytest

from minimapreduce.coordinator import TASK_TIMEOUT, Coordinator
from minimapreduce.helper import ALL_TASK_IN_PROGRESS, NO_TASK, TaskType


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _finish_maps(coordinator, count):
    for _ in range(count):
        reply = coordinator.ask_job()
        coordinator.ack_job(reply.task_number, TaskType.MAP)


def test_constructor_prints_file_names(capsys):
    Coordinator(["a.txt", "b.txt"], 2)
    assert capsys.readouterr().out == "a.txt\nb.txt\n"


def test_map_tasks_handed_out_in_order():
    coordinator = Coordinator(["a.txt", "b.txt"], 3)
    first = coordinator.ask_job()
    second = coordinator.ask_job()
    assert (first.file_name, first.task_number, first.task_type) == ("a.txt", 0, TaskType.MAP)
    assert (second.file_name, second.task_number) == ("b.txt", 1)
    assert first.n_reduce == 3


def test_no_map_task_left_while_pending():
    coordinator = Coordinator(["a.txt"], 2)
    coordinator.ask_job()
    reply = coordinator.ask_job()
    assert reply.task_type is TaskType.MAP
    assert (reply.file_name, reply.task_number) == ("", NO_TASK)


def test_reduce_phase_starts_after_all_maps_acked():
    coordinator = Coordinator(["a.txt", "b.txt"], 2)
    coordinator.ask_job()
    coordinator.ask_job()
    coordinator.ack_job(0, TaskType.MAP)
    assert coordinator.ask_job().task_type is TaskType.MAP
    coordinator.ack_job(1, TaskType.MAP)
    reply = coordinator.ask_job()
    assert reply.task_type is TaskType.REDUCE
    assert (reply.file_name, reply.task_number) == ("0", 0)


def test_reduce_tasks_report_in_progress_then_none():
    coordinator = Coordinator(["a.txt"], 2)
    _finish_maps(coordinator, 1)
    numbers = [coordinator.ask_job().task_number for _ in range(2)]
    assert numbers == [0, 1]
    assert coordinator.ask_job().task_number == ALL_TASK_IN_PROGRESS
    coordinator.ack_job(0, TaskType.REDUCE)
    assert coordinator.ask_job().task_number == ALL_TASK_IN_PROGRESS
    coordinator.ack_job(1, TaskType.REDUCE)
    reply = coordinator.ask_job()
    assert (reply.file_name, reply.task_number) == ("", NO_TASK)


def test_done_only_after_everything_finished():
    coordinator = Coordinator(["a.txt"], 2)
    assert coordinator.done() is False
    _finish_maps(coordinator, 1)
    assert coordinator.done() is False
    for _ in range(2):
        reply = coordinator.ask_job()
        coordinator.ack_job(reply.task_number, TaskType.REDUCE)
    assert coordinator.done() is True


def test_stale_map_task_is_requeued():
    clock = FakeClock()
    coordinator = Coordinator(["a.txt"], 1, clock=clock)
    coordinator.ask_job()
    clock.now += TASK_TIMEOUT - 1
    coordinator.done()
    assert coordinator.ask_job().task_number == NO_TASK
    clock.now += 1
    assert coordinator.done() is False
    reply = coordinator.ask_job()
    assert (reply.file_name, reply.task_number) == ("a.txt", 0)


def test_stale_reduce_task_is_requeued():
    clock = FakeClock()
    coordinator = Coordinator(["a.txt"], 1, clock=clock)
    _finish_maps(coordinator, 1)
    assert coordinator.ask_job().task_number == 0
    assert coordinator.ask_job().task_number == ALL_TASK_IN_PROGRESS
    clock.now += TASK_TIMEOUT
    coordinator.done()
    reply = coordinator.ask_job()
    assert (reply.task_type, reply.task_number) == (TaskType.REDUCE, 0)


def test_ack_unknown_task_raises():
    coordinator = Coordinator(["a.txt"], 1)
    with pytest.raises(KeyError):
        coordinator.ack_job(5, TaskType.MAP)
    with pytest.raises(KeyError):
        coordinator.ack_job(7, TaskType.REDUCE)


def test_direct_getters_claim_tasks():
    coordinator = Coordinator(["a.txt"], 1)
    assert coordinator.get_unstarted_map_job() == ("a.txt", 0)
    assert coordinator.get_unstarted_map_job() == ("", NO_TASK)
    assert coordinator.get_unstarted_reduce_job() == ("0", 0)
    assert coordinator.get_unstarted_reduce_job() == ("", ALL_TASK_IN_PROGRESS)


def test_concurrent_askers_get_distinct_tasks():
    files = [f"f{i}.txt" for i in range(50)]
    coordinator = Coordinator(files, 1)

    with ThreadPoolExecutor(max_workers=8) as pool:
        replies = list(pool.map(lambda _: coordinator.ask_job(), range(80)))

    claimed = sorted(
        (reply.task_number, reply.file_name) for reply in replies if reply.task_number >= 0
    )
    assert claimed == [(i, f"f{i}.txt") for i in range(50)]
    assert [reply.task_number for reply in replies].count(NO_TASK) == 30
    assert all(reply.task_type is TaskType.MAP for reply in replies)