import logging
import queue
import sys
import tkinter as tk

import ttkbootstrap as tb
from screeninfo import get_monitors

from app_config import config_path, load_config, save_config, setup_logging
from constants import (
    APP_TITLE, REFRESH_MS, REFRESH_GUI_MS, WINDOW_MIN_SIZE, FONT_TAB, palette_for,
)
from data_fetcher import SampleFetcher, make_channel
from monitor_core import format_bytes, format_percent
from widgets import build_metric_tab

log = logging.getLogger(__name__)


# ==============================================================================
# ==== Window placement
# ==============================================================================
def initial_geometry(config, screen_w, screen_h):
    """
    Geometry string for the main window, centred on the configured monitor
    (1-based index) or on the primary screen when the index is 0 or invalid.
    """
    w, h = config["window_width"], config["window_height"]
    monitor_idx = config["monitor_index"]
    try:
        monitors = get_monitors()
        if 0 < monitor_idx <= len(monitors):
            monitor = monitors[monitor_idx - 1]
            x = monitor.x + (monitor.width - w) // 2
            y = monitor.y + (monitor.height - h) // 2
            return f"{w}x{h}+{x}+{y}"
    except Exception as e:
        log.warning("Monitor lookup failed, centring on the primary screen: %s", e)
    x = max(0, (screen_w - w) // 2)
    y = max(0, (screen_h - h) // 2)
    return f"{w}x{h}+{x}+{y}"


# ==============================================================================
# ==== Main window
# ==============================================================================
class MonitorApp:
    def __init__(self, config):
        self.config = config
        self.dark = config["dark_mode"]
        palette = palette_for(self.dark)

        self.root = tb.Window(themename=palette.bootstrap_theme)
        self.root.title(APP_TITLE)
        self.root.minsize(*WINDOW_MIN_SIZE)
        self.root.geometry(initial_geometry(config, self.root.winfo_screenwidth(),
                                            self.root.winfo_screenheight()))
        self.style = tb.Style()
        self.style.configure("TNotebook.Tab", font=FONT_TAB)

        self._build_menu()

        nb = tb.Notebook(self.root)
        nb.pack(fill="both", expand=True)
        _, self.cpu_label, self.cpu_chart = build_metric_tab(nb, "CPU", "CPU Usage", self.dark)
        _, self.ram_label, self.ram_chart = build_metric_tab(nb, "RAM", "RAM Usage", self.dark)
        _, self.net_label, self.net_chart = build_metric_tab(nb, "Network", "Network Activity", self.dark)
        self.labels = (self.cpu_label, self.ram_label, self.net_label)
        self.charts = (self.cpu_chart, self.ram_chart, self.net_chart)

        self.channel = make_channel()
        self.fetcher = SampleFetcher(self.channel, interval=REFRESH_MS / 1000)

        self.fullscreen = False
        self.root.bind("<F11>", self.toggle_fullscreen)
        self.root.bind("<Escape>", lambda e: self.toggle_fullscreen(enable=False))
        self.root.bind("<F12>", lambda e: self.toggle_theme())
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        self.apply_theme()

    def _build_menu(self):
        self.menu_bar = tk.Menu(self.root)
        self.view_menu = tk.Menu(self.menu_bar, tearoff=0)
        self.view_menu.add_command(label="Toggle Dark/Light Mode", command=self.toggle_theme)
        self.menu_bar.add_cascade(label="View", menu=self.view_menu)
        self.root.config(menu=self.menu_bar)

    # --- Theme ---
    def toggle_theme(self):
        self.dark = not self.dark
        self.config["dark_mode"] = self.dark
        self.apply_theme()
        log.info("Switched to %s theme", "dark" if self.dark else "light")

    def apply_theme(self):
        palette = palette_for(self.dark)
        self.style.theme_use(palette.bootstrap_theme)
        self.style.configure("TNotebook.Tab", font=FONT_TAB)
        for lbl in self.labels:
            lbl.configure(background=palette.label_bg or "", foreground=palette.label_fg)
        for chart in self.charts:
            chart.set_theme(self.dark)
        for menu in (self.menu_bar, self.view_menu):
            menu.configure(background=palette.chrome_bg, foreground=palette.chrome_fg)

    def toggle_fullscreen(self, event=None, enable=None):
        self.fullscreen = (not self.fullscreen) if enable is None else enable
        self.root.attributes("-fullscreen", self.fullscreen)

    # ==============================================================================
    # ==== GUI update loop
    # ==============================================================================
    def show_reading(self, reading):
        if reading.cpu_load is not None:
            self.cpu_label.config(text=f"CPU Usage: {format_percent(reading.cpu_load)}")
            self.cpu_chart.append(reading.cpu_load)

        if reading.ram_usage is not None:
            self.ram_label.config(
                text=f"RAM Usage: {format_percent(reading.ram_usage)} "
                     f"({format_bytes(reading.ram_used)} / {format_bytes(reading.ram_total)})")
            self.ram_chart.append(reading.ram_usage)

        if reading.net_activity is not None:
            self.net_label.config(
                text=f"Network: {format_bytes(reading.delta_sent)} ↑ / "
                     f"{format_bytes(reading.delta_recv)} ↓")
            self.net_chart.append(reading.net_activity)

    def update_gui(self):
        try:
            self.show_reading(self.channel.get_nowait())
        except queue.Empty:
            pass
        finally:
            self.root.after(REFRESH_GUI_MS, self.update_gui)

    # ==============================================================================
    # ==== Start / close
    # ==============================================================================
    def run(self):
        self.fetcher.start()
        self.update_gui()
        self.root.mainloop()

    def on_close(self):
        self.fetcher.stop()
        save_config(self.config)
        self.root.destroy()


def main():
    config = load_config()
    setup_logging(config["log_level"])
    log.info("Using config %s", config_path())
    MonitorApp(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
