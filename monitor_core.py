import logging
import math
from collections import namedtuple

import psutil

from constants import NET_FULL_SCALE_BYTES

log = logging.getLogger(__name__)

# CPU states counted as not busy. guest/guest_nice are already included in
# user/nice by the kernel, so they are left out of the total altogether.
IDLE_STATES = ("idle", "iowait")
EXCLUDED_STATES = ("guest", "guest_nice")

LOOPBACK_NAMES = ("lo", "loopback")

# net_counters maps interface name to cumulative (bytes_sent, bytes_recv)
TickState = namedtuple("TickState", ["cpu_ticks", "net_counters"])

Reading = namedtuple("Reading", [
    "cpu_load",
    "ram_usage",
    "ram_used",
    "ram_total",
    "net_activity",
    "delta_sent",
    "delta_recv",
])


class PsutilProbe:
    """Hardware reads backed by psutil."""

    def read_cpu_ticks(self):
        return dict(psutil.cpu_times()._asdict())

    def read_memory(self):
        mem = psutil.virtual_memory()
        return mem.total, mem.available

    def read_net_counters(self):
        """
        Returns {interface: (bytes_sent, bytes_recv)} for every interface that
        is up, loopback excluded.
        """
        counters = psutil.net_io_counters(pernic=True)
        if_stats = psutil.net_if_stats()
        result = {}
        for iface, io in counters.items():
            if iface.lower() in LOOPBACK_NAMES:
                continue
            stats = if_stats.get(iface)
            if stats is not None and not stats.isup:
                continue
            result[iface] = (io.bytes_sent, io.bytes_recv)
        return result


# ---- Pure metric math ----
def _check_finite(name, *values):
    for v in values:
        if not math.isfinite(v):
            raise ValueError(f"{name} returned non-finite value {v!r}")


def cpu_load_between(prev_ticks: dict, cur_ticks: dict) -> float:
    """
    Fraction of CPU time spent busy between two cumulative tick snapshots.
    Both arguments map state name to cumulative ticks (or seconds).
    """
    total = busy = 0.0
    for state, cur in cur_ticks.items():
        if state in EXCLUDED_STATES:
            continue
        delta = cur - prev_ticks.get(state, 0)
        total += delta
        if state not in IDLE_STATES:
            busy += delta
    _check_finite("cpu ticks", total, busy)
    if total <= 0:
        return 0.0
    return min(1.0, max(0.0, busy / total))


def ram_usage(total, available) -> float:
    _check_finite("memory", total, available)
    if total <= 0:
        raise ValueError(f"total memory must be positive, got {total}")
    return min(1.0, max(0.0, (total - available) / total))


def net_delta(current, previous):
    """Per-direction byte delta; a counter that went backwards counts as 0."""
    return max(0, current - previous)


def net_deltas(prev_counters, cur_counters):
    """
    Summed (sent, recv) deltas over interfaces present in both snapshots.
    An interface that just appeared or came back up only sets its baseline.
    """
    delta_sent = delta_recv = 0
    for iface, (sent, recv) in cur_counters.items():
        _check_finite(f"network counters for {iface}", sent, recv)
        if iface not in prev_counters:
            continue
        prev_sent, prev_recv = prev_counters[iface]
        delta_sent += net_delta(sent, prev_sent)
        delta_recv += net_delta(recv, prev_recv)
    return delta_sent, delta_recv


def net_activity(delta_sent, delta_recv) -> float:
    return min(1.0, (delta_sent + delta_recv) / NET_FULL_SCALE_BYTES)


# ---- Formatting ----
def format_percent(value):
    return f"{value * 100:.1f}%"


def format_bytes(num_bytes):
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value, exp = float(num_bytes), 0
    while value >= 1024 and exp < 6:
        value /= 1024
        exp += 1
    return f"{value:.1f} {'KMGTPE'[exp - 1]}B"


# ---- Collection ----
def prime_tick_state(probe):
    """
    Un-reported first read so the first displayed deltas are measured from
    application start rather than from boot.
    """
    cpu_ticks = probe.read_cpu_ticks()
    net_counters = probe.read_net_counters()
    log.debug("Primed baseline over %d interfaces", len(net_counters))
    return TickState(cpu_ticks, net_counters)


def collect(probe, state):
    """
    One tick. Returns (new_state, reading). Each metric is read on its own;
    a failure in one is logged and reported as None without affecting the
    others, and that metric keeps its previous baseline.
    """
    cpu_ticks, net_counters = state

    cpu_load = None
    try:
        current = probe.read_cpu_ticks()
        cpu_load = cpu_load_between(cpu_ticks, current)
        cpu_ticks = current
    except Exception:
        log.warning("CPU read failed", exc_info=True)

    ram = used = total = None
    try:
        total, available = probe.read_memory()
        ram = ram_usage(total, available)
        used = total - available
    except Exception:
        log.warning("Memory read failed", exc_info=True)
        total = None

    activity = delta_sent = delta_recv = None
    try:
        current = probe.read_net_counters()
        delta_sent, delta_recv = net_deltas(net_counters, current)
        activity = net_activity(delta_sent, delta_recv)
        net_counters = current
    except Exception:
        log.warning("Network read failed", exc_info=True)
        delta_sent = delta_recv = None

    reading = Reading(cpu_load, ram, used, total, activity, delta_sent, delta_recv)
    return TickState(cpu_ticks, net_counters), reading
