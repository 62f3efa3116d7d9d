import pytest


class RecordingCanvas:
    """Stands in for a tkinter Canvas and records every create_* call."""

    def __init__(self):
        self.items = []

    def _record(self, kind, coords, kwargs):
        self.items.append((kind, list(coords), kwargs))

    def create_line(self, *coords, **kwargs):
        self._record("line", coords, kwargs)

    def create_polygon(self, *coords, **kwargs):
        self._record("polygon", coords, kwargs)

    def create_text(self, *coords, **kwargs):
        self._record("text", coords, kwargs)

    def create_rectangle(self, *coords, **kwargs):
        self._record("rectangle", coords, kwargs)

    def tagged(self, tag):
        return [item for item in self.items if item[2].get("tags") == tag]


class FakeProbe:
    """Scripted hardware reads. Each list is consumed one value per call."""

    def __init__(self, cpu=(), memory=(), net=()):
        self.cpu = list(cpu)
        self.memory = list(memory)
        self.net = list(net)

    @staticmethod
    def _next(values):
        value = values.pop(0)
        if isinstance(value, Exception):
            raise value
        return value

    def read_cpu_ticks(self):
        return self._next(self.cpu)

    def read_memory(self):
        return self._next(self.memory)

    def read_net_counters(self):
        return self._next(self.net)


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def make_probe():
    return FakeProbe


class FakeTkCanvas(RecordingCanvas):
    """RecordingCanvas plus the sizing, binding and idle-callback calls ChartCanvas makes."""

    def __init__(self, width=640, height=240):
        super().__init__()
        self.width = width
        self.height = height
        self.bindings = {}
        self.idle_callbacks = []
        self.options = {}
        self.deletes = 0

    def bind(self, sequence, func):
        self.bindings[sequence] = func

    def after_idle(self, func):
        self.idle_callbacks.append(func)
        return f"after#{len(self.idle_callbacks)}"

    def run_idle(self):
        callbacks, self.idle_callbacks = self.idle_callbacks, []
        for func in callbacks:
            func()

    def winfo_width(self):
        return self.width

    def winfo_height(self):
        return self.height

    def delete(self, tag):
        assert tag == "all"
        self.items.clear()
        self.deletes += 1

    def configure(self, **options):
        self.options.update(options)


@pytest.fixture
def tk_canvas():
    return FakeTkCanvas()
