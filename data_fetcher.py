import logging
import queue
import threading
import time

import monitor_core as core

log = logging.getLogger(__name__)


def make_channel():
    """Single-slot channel between the fetcher and the GUI thread."""
    return queue.Queue(maxsize=1)


def publish(channel, item):
    """Puts `item` on the channel, replacing a reading nobody has taken yet."""
    try:
        channel.put_nowait(item)
    except queue.Full:
        try:
            channel.get_nowait()
        except queue.Empty:
            pass
        channel.put_nowait(item)


# This class runs in a separate thread and is the only owner of the tick
# state, so the GUI never touches hardware counters directly.
class SampleFetcher(threading.Thread):
    def __init__(self, channel, interval=1.0, probe=None, clock=time.monotonic):
        super().__init__(name="SampleFetcher")
        self.channel = channel
        self.interval = interval
        self.probe = probe if probe is not None else core.PsutilProbe()
        self.clock = clock
        self.state = core.prime_tick_state(self.probe)
        self._stop_event = threading.Event()
        self.daemon = True  # exit with the main program

    def tick(self):
        self.state, reading = core.collect(self.probe, self.state)
        publish(self.channel, reading)
        return reading

    def run(self):
        log.info("Sampling every %.1fs", self.interval)
        # Fixed rate: tick n is due at start + n * interval, however long the
        # previous collection took. A late tick runs without waiting.
        next_tick = self.clock()
        while not self._stop_event.is_set():
            self.tick()
            next_tick += self.interval
            if self._stop_event.wait(max(0.0, next_tick - self.clock())):
                break
        log.info("Sampler stopped")

    def stop(self):
        self._stop_event.set()
