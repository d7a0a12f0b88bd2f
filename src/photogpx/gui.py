import tkinter as tk
from tkinter import filedialog, messagebox
import ttkbootstrap as ttk
from ttkbootstrap.constants import *
import logging
import threading
from pathlib import Path
from typing import Optional

from .config import ConfigManager
from .constants import APP_TITLE, APP_SIZE, APP_MIN_SIZE, PROGRESS_POLL_MS, UIMessages
from .exceptions import PhotoToGPXError
from .main import setup_logging
from .models import ProcessingProgress, ProcessingResult
from .processor import PhotoProcessor
from .progress import ProgressChannel, PROGRESS, DONE, FAILED

logger = logging.getLogger(__name__)

# Counter label -> ProcessingProgress attribute
COUNTERS = [
    ("Total Photos", "total_photos"),
    ("Processed", "processed_photos"),
    ("Remaining", "remaining_photos"),
    ("Successful", "successful_photos"),
    ("Skipped", "skipped_photos"),
    ("Errors", "error_photos"),
]


class PhotoToGpxApp:
    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.root.title(APP_TITLE)
        self.root.geometry(APP_SIZE)
        self.root.resizable(True, True)
        self.root.minsize(*APP_MIN_SIZE)

        self.config = ConfigManager.load_config()
        self.processor_config = ConfigManager.to_processor_config(self.config)
        Path(self.processor_config.output_dir).mkdir(parents=True, exist_ok=True)

        self.channel: Optional[ProgressChannel] = None
        self.folder_var = tk.StringVar(value=self.config.get("input_dir", ""))
        self.progress_var = tk.DoubleVar()
        self.counter_vars = {attr: tk.StringVar(value=f"{label}: 0") for label, attr in COUNTERS}
        self.success_rate_var = tk.StringVar(value="Success Rate: 0.0%")

        # --- HEADER ---
        header_frame = ttk.Frame(root, bootstyle="primary")
        header_frame.pack(fill=X)
        ttk.Label(
            header_frame,
            text=APP_TITLE,
            font=("Helvetica", 20, "bold"),
            bootstyle="inverse-primary",
            padding=12,
        ).pack()

        main_frame = ttk.Frame(root, padding=20)
        main_frame.pack(fill=BOTH, expand=True)

        # Folder selection
        ttk.Label(main_frame, text="Photo Folder", font=("Helvetica", 10, "bold")).grid(
            row=0, column=0, sticky="w", pady=10
        )
        ttk.Entry(main_frame, textvariable=self.folder_var, width=45, state="readonly").grid(
            row=0, column=1, pady=10, padx=10, sticky="ew"
        )
        self.btn_select = ttk.Button(
            main_frame, text=UIMessages.BTN_SELECT, bootstyle="info-outline", command=self._browse_folder
        )
        self.btn_select.grid(row=0, column=2, pady=10)
        main_frame.columnconfigure(1, weight=1)

        # Counters
        counters_frame = ttk.Frame(main_frame)
        counters_frame.grid(row=1, column=0, columnspan=3, sticky="ew", pady=(10, 0))
        for i, (_, attr) in enumerate(COUNTERS):
            ttk.Label(counters_frame, textvariable=self.counter_vars[attr]).grid(
                row=i // 2, column=i % 2, sticky="w", padx=(0, 30), pady=2
            )
        ttk.Label(counters_frame, textvariable=self.success_rate_var, bootstyle="success").grid(
            row=3, column=0, sticky="w", pady=2
        )

        # --- PROGRESS ---
        progress_frame = ttk.Frame(root, padding=20)
        progress_frame.pack(fill=X, side=BOTTOM)
        self.status_label = ttk.Label(progress_frame, text=UIMessages.WAITING, anchor="w")
        self.status_label.pack(fill=X, pady=(0, 5))
        ttk.Progressbar(
            progress_frame, variable=self.progress_var, maximum=100, bootstyle="success-striped"
        ).pack(fill=X)

        btn_frame = ttk.Frame(root, padding=(20, 0))
        btn_frame.pack(fill=X, side=BOTTOM)
        self.btn_start = ttk.Button(
            btn_frame,
            text=UIMessages.BTN_START,
            bootstyle="success",
            cursor="hand2",
            command=self.start_processing_thread,
            state=NORMAL if self.folder_var.get() else DISABLED,
        )
        self.btn_start.pack(fill=X)

    def _browse_folder(self) -> None:
        initial_dir = self.folder_var.get() or str(Path.home())
        folder_selected = filedialog.askdirectory(
            initialdir=initial_dir, title=UIMessages.DIALOG_TITLE, mustexist=True
        )
        if folder_selected:
            self.folder_var.set(folder_selected)
            self.btn_start.config(state=NORMAL)
            self._reset_status()

    def _reset_status(self) -> None:
        self.progress_var.set(0)
        for label, attr in COUNTERS:
            self.counter_vars[attr].set(f"{label}: 0")
        self.success_rate_var.set("Success Rate: 0.0%")
        self.status_label.config(text=UIMessages.READY, bootstyle="default")

    def start_processing_thread(self) -> None:
        folder = self.folder_var.get()
        if not folder:
            messagebox.showwarning("No Folder Selected", UIMessages.NO_FOLDER)
            return

        ConfigManager.save_config(input_dir=folder)
        self._set_running(True)
        self._reset_status()
        self.status_label.config(text=UIMessages.STARTING, bootstyle="warning")

        self.channel = ProgressChannel()
        thread = threading.Thread(target=self._run_backend_process, args=(folder, self.channel))
        thread.daemon = True
        thread.start()
        self.root.after(PROGRESS_POLL_MS, self._poll_channel)

    def _run_backend_process(self, folder: str, channel: ProgressChannel) -> None:
        # Worker thread: only talks to the UI through the channel.
        try:
            processor = PhotoProcessor(self.processor_config)
            channel.finish(processor.process(folder, channel.report))
        except Exception as e:
            if not isinstance(e, PhotoToGPXError):
                logger.exception("Unexpected error while processing photos")
            channel.fail(e)

    def _poll_channel(self) -> None:
        if self.channel is None:
            return
        for kind, payload in self.channel.drain():
            if kind == PROGRESS:
                self._apply_progress(payload)
            elif kind == DONE:
                self.channel = None
                self._show_result(payload)
                return
            elif kind == FAILED:
                self.channel = None
                self._show_error(str(payload))
                return
        self.root.after(PROGRESS_POLL_MS, self._poll_channel)

    def _apply_progress(self, progress: ProcessingProgress) -> None:
        self.progress_var.set(progress.percentage)
        for label, attr in COUNTERS:
            self.counter_vars[attr].set(f"{label}: {getattr(progress, attr)}")
        self.success_rate_var.set(f"Success Rate: {progress.success_rate:.1f}%")
        self.status_label.config(text=f"{progress.percentage}% - {progress.current_file}")

    def _set_running(self, running: bool) -> None:
        state = DISABLED if running else NORMAL
        self.btn_start.config(state=state, text=UIMessages.PROCESSING if running else UIMessages.BTN_START)
        self.btn_select.config(state=state)

    def _show_result(self, result: ProcessingResult) -> None:
        self._set_running(False)
        self.progress_var.set(100)
        if result.successful_photos > 0:
            self.status_label.config(text=UIMessages.SUCCESS, bootstyle="success")
            messagebox.showinfo("Processing Complete", result.summary())
        else:
            self.status_label.config(text=UIMessages.WARNING, bootstyle="warning")
            messagebox.showwarning("Processing Complete", result.summary())

    def _show_error(self, error_msg: str) -> None:
        self._set_running(False)
        self.progress_var.set(0)
        self.status_label.config(text=UIMessages.ERROR, bootstyle="danger")
        messagebox.showerror("Error", f"An error occurred: {error_msg}")


def main():
    setup_logging()
    app_window = ttk.Window(themename="cosmo")
    PhotoToGpxApp(app_window)
    app_window.mainloop()


if __name__ == "__main__":
    main()
