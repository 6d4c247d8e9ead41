import logging
import tkinter as tk
from tkinter import ttk, colorchooser
from tkinter import font as tkfont

from . import host
from .gpu import GpuProbe
from .report import take_snapshot, render_text, window_origin
from .settings import load_settings, save_settings

logger = logging.getLogger(__name__)

BG_COLOR = '#1c1c1c'
POSITIONS = ("Top Left", "Top Right")


# --- Main Application Class ---
class SystemOverlayApp:
    def __init__(self, settings=None, probe=None):
        self.settings = settings if settings is not None else load_settings()
        self.probe = probe or GpuProbe()
        self.const_info = host.const_info()
        self.cpu_name = host.cpu_name()
        host.prime_cpu_percent()
        # Replaced wholesale on every refresh, never patched field by field.
        self.snapshot = None
        self.settings_root = None
        self.overlay_root = None
        self.stats_label = None
        self.is_quitting = False

    def create_settings_window(self):
        self.settings_root = tk.Tk()
        self.settings_root.title("Overlay Settings")
        self.settings_root.geometry("350x250")
        self.settings_root.resizable(False, False)
        frame = ttk.Frame(self.settings_root, padding="10")
        frame.pack(fill="both", expand=True)
        ttk.Label(frame, text="Position:").grid(row=0, column=0, columnspan=2, sticky="w", pady=5)
        self.pos_var = tk.StringVar(value=self.settings['position'])
        pos_menu = ttk.OptionMenu(frame, self.pos_var, self.settings['position'], *POSITIONS)
        pos_menu.grid(row=0, column=2, sticky="ew")
        ttk.Label(frame, text="Text Color:").grid(row=1, column=0, columnspan=2, sticky="w", pady=5)
        self.color_button = tk.Button(frame, text="Choose Color", command=self.choose_color, bg=self.settings['color'])
        self.color_button.grid(row=1, column=2, sticky="ew")
        ttk.Label(frame, text="Size:").grid(row=2, column=0, sticky="w", pady=5)
        self.size_label = ttk.Label(frame, text=str(self.settings['size']), width=3)
        self.size_label.grid(row=2, column=1, sticky="w", padx=5)
        self.size_var = tk.DoubleVar(value=self.settings['size'])
        def update_size_label(value): self.size_label.config(text=f"{float(value):.0f}")
        size_slider = ttk.Scale(frame, from_=8, to=24, orient='horizontal', variable=self.size_var, command=update_size_label)
        size_slider.grid(row=2, column=2, sticky="ew")
        start_button = ttk.Button(frame, text="Start Overlay", command=self.start_overlay)
        start_button.grid(row=3, column=0, columnspan=3, pady=20)
        frame.columnconfigure(2, weight=1)
        self.settings_root.mainloop()

    def choose_color(self):
        color_code = colorchooser.askcolor(title="Choose color", initialcolor=self.settings['color'])
        if color_code and color_code[1]:
            self.settings['color'] = color_code[1]
            self.color_button.config(bg=self.settings['color'])

    def start_overlay(self):
        self.settings['position'] = self.pos_var.get()
        self.settings['size'] = int(self.size_var.get())
        try:
            save_settings(self.settings)
        except OSError:
            logger.exception("Could not save settings")
        self.settings_root.destroy()
        self.settings_root = None
        self.create_overlay_window()

    def create_overlay_window(self):
        self.overlay_root = tk.Tk()
        self.overlay_root.overrideredirect(True)
        self.overlay_root.wm_attributes("-topmost", True)
        try:
            self.overlay_root.wm_attributes("-type", "splash")
        except tk.TclError:
            # X11 only
            pass
        self.overlay_root.wm_attributes("-alpha", self.settings['alpha'])
        self.overlay_root.config(bg=BG_COLOR)

        overlay_font = tkfont.Font(family='monospace',
                                   size=self.settings['size'],
                                   weight='bold')

        self.stats_label = tk.Label(
            self.overlay_root, text="Loading...",
            font=overlay_font,
            bg=BG_COLOR, fg=self.settings['color'], padx=10, pady=5, justify=tk.LEFT)
        self.stats_label.pack()

        context_menu = tk.Menu(self.overlay_root, tearoff=0)
        context_menu.add_command(label="Quit", command=self.quit)
        def show_context_menu(event): context_menu.post(event.x_root, event.y_root)
        self.stats_label.bind("<Button-3>", show_context_menu)
        self.update_stats()
        self.position_window()
        self.overlay_root.mainloop()

    def update_stats(self):
        if self.is_quitting: return
        self.snapshot = take_snapshot(self.const_info, self.probe, self.cpu_name)
        if self.is_quitting: return
        self.stats_label.config(text=render_text(self.snapshot))
        self.overlay_root.after(int(self.settings['refresh_ms']), self.update_stats)

    def position_window(self):
        self.overlay_root.update_idletasks()
        screen_width = self.overlay_root.winfo_screenwidth()
        window_width = self.overlay_root.winfo_width()
        x, y = window_origin(self.settings, screen_width, window_width)
        self.overlay_root.geometry(f"+{x}+{y}")

    def quit(self):
        self.is_quitting = True
        if self.overlay_root: self.overlay_root.destroy()
        if self.settings_root: self.settings_root.destroy()
