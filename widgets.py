import ttkbootstrap as tb
from ttkbootstrap.constants import *

from chart_graphics import MetricChart
from constants import FONT_READOUT, READOUT_PADDING, CHART_MIN_HEIGHT


class ChartCanvas:
    """Ties a MetricChart to a canvas and redraws it when it is dirty or resized."""

    def __init__(self, parent, title, dark=True, canvas=None):
        self.chart = MetricChart(title, dark=dark)
        if canvas is None:
            canvas = tb.Canvas(parent, height=CHART_MIN_HEIGHT, highlightthickness=0,
                               background=self.chart.palette.background_top)
        self.canvas = canvas
        self._pending = None
        self.canvas.bind("<Configure>", lambda e: self.schedule_redraw(force=True))

    def append(self, sample):
        self.chart.append(sample)
        self.schedule_redraw()

    def set_theme(self, dark):
        self.chart.set_theme(dark)
        self.canvas.configure(background=self.chart.palette.background_top)
        self.schedule_redraw()

    def schedule_redraw(self, force=False):
        if force:
            self.chart.dirty = True
        if self._pending is None:
            self._pending = self.canvas.after_idle(self.redraw)

    def redraw(self):
        self._pending = None
        if not self.chart.dirty:
            return
        w, h = self.canvas.winfo_width(), self.canvas.winfo_height()
        if w < 10 or h < 10:
            return
        self.canvas.delete("all")
        self.chart.render(self.canvas, w, h)
        self.chart.mark_clean()


def build_metric_tab(notebook, tab_text, chart_title, dark=True):
    """
    Builds one notebook tab: a readout label over a chart canvas, laid out
    with .grid() so the chart takes all the spare space.
    """
    f = tb.Frame(notebook)
    f.columnconfigure(0, weight=1)
    f.rowconfigure(1, weight=1)

    padx, pady = READOUT_PADDING
    lbl = tb.Label(f, text=f"{chart_title}: ...", anchor=W, font=FONT_READOUT,
                   padding=(padx, pady))
    lbl.grid(row=0, column=0, sticky=EW)

    chart = ChartCanvas(f, chart_title, dark=dark)
    chart.canvas.grid(row=1, column=0, sticky=NSEW)

    notebook.add(f, text=tab_text)
    return f, lbl, chart
