import math
from collections import deque

from constants import (
    MAX_POINTS, MARGIN_LEFT, MARGIN_RIGHT, MARGIN_TOP, MARGIN_BOTTOM,
    GRID_LINES, LABEL_GAP, TITLE_GAP, LINE_WIDTH, FILL_ALPHA,
    FONT_AXIS, FONT_CHART_TITLE, palette_for,
)


# --- Color helpers ---
def hex_to_rgb(color):
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb):
    return "#%02x%02x%02x" % tuple(int(round(c)) for c in rgb)


def blend(fg, bg, alpha):
    """Color of `fg` painted at `alpha` opacity over `bg`."""
    f, b = hex_to_rgb(fg), hex_to_rgb(bg)
    return rgb_to_hex(b[i] + (f[i] - b[i]) * alpha for i in range(3))


class TimeSeries:
    """Bounded FIFO of samples in [0, 1], oldest first."""

    def __init__(self, capacity=MAX_POINTS):
        self.capacity = capacity
        self._data = deque(maxlen=capacity)

    def append(self, sample):
        sample = float(sample)
        if not math.isfinite(sample):
            raise ValueError(f"sample must be finite, got {sample!r}")
        self._data.append(min(1.0, max(0.0, sample)))

    def values(self):
        return list(self._data)

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)


# --- Geometry ---
def plot_area(width, height):
    """Returns (left, top, plot_width, plot_height)."""
    return (MARGIN_LEFT, MARGIN_TOP,
            width - MARGIN_LEFT - MARGIN_RIGHT,
            height - MARGIN_TOP - MARGIN_BOTTOM)


def get_points(samples, width, height, capacity=MAX_POINTS):
    """
    Maps samples to canvas coordinates. The x step is fixed by the series
    capacity, so a partly filled series sits on the left of the plot.
    """
    left, top, plot_w, plot_h = plot_area(width, height)
    step = plot_w / capacity
    return [(left + i * step, top + plot_h * (1 - v)) for i, v in enumerate(samples)]


# --- Drawing ---
def draw_background(surface, width, height, palette):
    if palette.background_top == palette.background_bottom:
        surface.create_rectangle(0, 0, width, height, fill=palette.background_top,
                                 outline="", tags="background")
        return
    top, bottom = hex_to_rgb(palette.background_top), hex_to_rgb(palette.background_bottom)
    span = max(1, height - 1)
    for y in range(height):
        t = y / span
        color = rgb_to_hex(top[i] + (bottom[i] - top[i]) * t for i in range(3))
        surface.create_line(0, y, width, y, fill=color, tags="background")


def draw_grid(surface, width, height, palette):
    left, top, plot_w, plot_h = plot_area(width, height)
    for i in range(GRID_LINES):
        y = top + (plot_h * i) // (GRID_LINES - 1)
        surface.create_line(left, y, left + plot_w, y, fill=palette.grid, width=1, tags="grid")
        surface.create_text(left - LABEL_GAP, y, text=f"{100 - i * 10}%", anchor="e",
                            fill=palette.text, font=FONT_AXIS, tags="axis")


def draw_title(surface, title, palette):
    surface.create_text(MARGIN_LEFT, MARGIN_TOP - TITLE_GAP, text=title, anchor="sw",
                        fill=palette.title, font=FONT_CHART_TITLE, tags="title")


def draw_filled_area(surface, points, height, palette):
    _, top, _, plot_h = plot_area(0, height)
    bottom = top + plot_h
    poly_pts = [(points[0][0], bottom)] + points + [(points[-1][0], bottom)]
    flat_pts = [coord for pt in poly_pts for coord in pt]
    fill_color = blend(palette.line, palette.background_bottom, FILL_ALPHA)
    surface.create_polygon(*flat_pts, fill=fill_color, outline="", tags="fill")


def draw_line(surface, points, palette):
    if len(points) == 1:
        # a zero-length round-capped segment renders as a dot
        points = points * 2
    flat_pts = [coord for pt in points for coord in pt]
    surface.create_line(*flat_pts, fill=palette.line, width=LINE_WIDTH,
                        capstyle="round", joinstyle="round", tags="line")


def draw_chart(surface, width, height, title, samples, palette, capacity=MAX_POINTS):
    """
    Draws one chart onto `surface`, anything exposing the tkinter Canvas
    create_* methods. Depends only on its arguments.
    """
    samples = list(samples)
    draw_background(surface, width, height, palette)
    draw_grid(surface, width, height, palette)
    draw_title(surface, title, palette)
    if not samples:
        return
    points = get_points(samples, width, height, capacity)
    # Fill first so the line is always on top.
    draw_filled_area(surface, points, height, palette)
    draw_line(surface, points, palette)


class MetricChart:
    """One metric's series, title and active palette."""

    def __init__(self, title, dark=True, capacity=MAX_POINTS):
        self.title = title
        self.series = TimeSeries(capacity)
        self.palette = palette_for(dark)
        self.dirty = True

    def append(self, sample):
        self.series.append(sample)
        self.dirty = True

    def set_theme(self, dark):
        self.palette = palette_for(dark)
        self.dirty = True

    def render(self, surface, width, height):
        draw_chart(surface, width, height, self.title, self.series, self.palette,
                   self.series.capacity)

    def mark_clean(self):
        self.dirty = False
