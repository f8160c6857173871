from __future__ import annotations

import logging
import threading
from pathlib import Path
from tkinter import filedialog, messagebox

import customtkinter as ctk

from compressor.config import DEFAULT_FORMAT, DEFAULT_QUALITY, FORMAT_CHOICES, MAX_DIMENSION_CHOICES
from compressor.core.converter import BatchConverter
from compressor.core.export import write_output, write_outputs, write_report
from compressor.core.models import (
    BatchResult,
    Outcome,
    OutputFormat,
    ProcessingError,
    ProcessingParams,
    ProcessingResult,
    SourceImage,
)
from compressor.core.preview import make_thumbnail
from compressor.core.savings import format_bytes
from compressor.core.sources import IMAGE_EXTENSIONS, load_sources
from compressor.core.validation import detect_output_conflicts, find_repeated_names, resolve_effective_output_dir

logger = logging.getLogger(__name__)

ORIGINAL_SIZE_LABEL = "Original size"


class MainWindow(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()

        self.title("Image Compressor")
        self.geometry("980x760")
        self.minsize(900, 680)

        self.selected_files: list[Path] = []
        self.output_dir: Path | None = None
        self.converter = BatchConverter()
        self.cancel_event = threading.Event()

        self.outcomes: list[Outcome] = []
        self.results: list[ProcessingResult] = []
        self.result_rows: list[ctk.CTkFrame] = []

        self._build_ui()

    def _build_ui(self) -> None:
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.tabs = ctk.CTkTabview(self)
        self.tabs.grid(row=0, column=0, sticky="nsew", padx=18, pady=(18, 18))

        self.compressor_tab = self.tabs.add("Compressor")
        self.results_tab = self.tabs.add("Results")

        self._build_compressor_tab(self.compressor_tab)
        self._build_results_tab(self.results_tab)

    def _build_compressor_tab(self, parent: ctk.CTkFrame) -> None:
        parent.grid_columnconfigure(0, weight=1)
        parent.grid_rowconfigure(4, weight=1)

        controls = ctk.CTkFrame(parent)
        controls.grid(row=0, column=0, sticky="ew", padx=0, pady=(0, 10))
        controls.grid_columnconfigure((0, 1), weight=1)

        self.select_files_button = ctk.CTkButton(controls, text="Select Images", command=self._pick_files)
        self.select_files_button.grid(row=0, column=0, padx=10, pady=10, sticky="ew")

        self.select_output_button = ctk.CTkButton(controls, text="Select Output Folder", command=self._pick_output_dir)
        self.select_output_button.grid(row=0, column=1, padx=10, pady=10, sticky="ew")

        options = ctk.CTkFrame(parent)
        options.grid(row=1, column=0, sticky="ew", padx=0, pady=(0, 10))
        options.grid_columnconfigure((0, 1), weight=1)

        self.files_label = ctk.CTkLabel(options, text="No images selected")
        self.files_label.grid(row=0, column=0, columnspan=2, sticky="w", padx=12, pady=(12, 6))

        self.output_label = ctk.CTkLabel(options, text="Output: not selected")
        self.output_label.grid(row=1, column=0, columnspan=2, sticky="w", padx=12, pady=(0, 10))

        ctk.CTkLabel(options, text="Quality").grid(row=2, column=0, sticky="w", padx=12)
        self.quality_value = ctk.StringVar(value=str(DEFAULT_QUALITY))
        self.quality_slider = ctk.CTkSlider(
            options,
            from_=0,
            to=100,
            number_of_steps=100,
            command=self._on_quality_change,
        )
        self.quality_slider.set(DEFAULT_QUALITY)
        self.quality_slider.grid(row=3, column=0, sticky="ew", padx=12, pady=(4, 12))

        self.quality_label = ctk.CTkLabel(options, textvariable=self.quality_value)
        self.quality_label.grid(row=3, column=1, sticky="w", padx=12)

        ctk.CTkLabel(options, text="Output Format").grid(row=4, column=0, sticky="w", padx=12)
        self.format_var = ctk.StringVar(value=DEFAULT_FORMAT)
        self.format_menu = ctk.CTkOptionMenu(options, values=list(FORMAT_CHOICES), variable=self.format_var)
        self.format_menu.grid(row=5, column=0, sticky="ew", padx=12, pady=(4, 12))

        ctk.CTkLabel(options, text="Max Dimension (px)").grid(row=4, column=1, sticky="w", padx=12)
        self.max_size_var = ctk.StringVar(value=ORIGINAL_SIZE_LABEL)
        self.max_size_menu = ctk.CTkOptionMenu(
            options,
            values=[self._max_size_label(value) for value in MAX_DIMENSION_CHOICES],
            variable=self.max_size_var,
        )
        self.max_size_menu.grid(row=5, column=1, sticky="ew", padx=12, pady=(4, 12))

        selected_frame = ctk.CTkFrame(parent)
        selected_frame.grid(row=2, column=0, sticky="nsew", padx=0, pady=(0, 10))
        selected_frame.grid_columnconfigure(0, weight=1)
        selected_frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(selected_frame, text="Selected images").grid(row=0, column=0, sticky="w", padx=12, pady=(10, 6))
        self.selected_images_text = ctk.CTkTextbox(selected_frame, height=120)
        self.selected_images_text.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.selected_images_text.configure(state="disabled")

        progress_frame = ctk.CTkFrame(parent)
        progress_frame.grid(row=3, column=0, sticky="ew", padx=0, pady=(0, 10))
        progress_frame.grid_columnconfigure(0, weight=1)

        self.progress_label = ctk.CTkLabel(progress_frame, text="Progress: 0/0")
        self.progress_label.grid(row=0, column=0, sticky="w", padx=12, pady=(10, 6))

        self.progress_bar = ctk.CTkProgressBar(progress_frame)
        self.progress_bar.set(0)
        self.progress_bar.grid(row=1, column=0, sticky="ew", padx=12, pady=(0, 12))

        logs_frame = ctk.CTkFrame(parent)
        logs_frame.grid(row=4, column=0, sticky="nsew", padx=0, pady=(0, 10))
        logs_frame.grid_rowconfigure(1, weight=1)
        logs_frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(logs_frame, text="Logs").grid(row=0, column=0, sticky="w", padx=12, pady=(10, 6))

        self.logs_text = ctk.CTkTextbox(logs_frame)
        self.logs_text.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))

        actions = ctk.CTkFrame(parent)
        actions.grid(row=5, column=0, sticky="ew", padx=0, pady=(0, 0))
        actions.grid_columnconfigure((0, 1), weight=1)

        self.start_button = ctk.CTkButton(actions, text="Compress Images", command=self._start_compression)
        self.start_button.grid(row=0, column=0, sticky="ew", padx=10, pady=10)

        self.cancel_button = ctk.CTkButton(actions, text="Cancel", state="disabled", command=self._cancel_compression)
        self.cancel_button.grid(row=0, column=1, sticky="ew", padx=10, pady=10)

    def _build_results_tab(self, parent: ctk.CTkFrame) -> None:
        parent.grid_columnconfigure(0, weight=1)
        parent.grid_rowconfigure(1, weight=1)

        controls = ctk.CTkFrame(parent)
        controls.grid(row=0, column=0, sticky="ew", padx=0, pady=(0, 10))
        controls.grid_columnconfigure(0, weight=1)

        self.results_status_label = ctk.CTkLabel(controls, text="No results yet.")
        self.results_status_label.grid(row=0, column=0, sticky="w", padx=12, pady=10)

        self.save_all_button = ctk.CTkButton(controls, text="Save All", width=120, command=self._save_all_results)
        self.save_all_button.grid(row=0, column=1, sticky="e", padx=(0, 6), pady=10)

        self.clear_results_button = ctk.CTkButton(controls, text="Clear Results", width=120, command=self._clear_results)
        self.clear_results_button.grid(row=0, column=2, sticky="e", padx=(6, 12), pady=10)

        self.results_scroll = ctk.CTkScrollableFrame(parent)
        self.results_scroll.grid(row=1, column=0, sticky="nsew", padx=0, pady=(0, 10))
        self.results_scroll.grid_columnconfigure(0, weight=1)

    def _pick_files(self) -> None:
        patterns = " ".join(f"*{extension}" for extension in sorted(IMAGE_EXTENSIONS))
        selected = filedialog.askopenfilenames(
            title="Select images",
            filetypes=[
                ("Images", patterns),
                ("All files", "*.*"),
            ],
        )

        if not selected:
            return

        self.selected_files = [Path(path) for path in selected]
        self.files_label.configure(text=f"Selected files: {len(self.selected_files)}")
        self._refresh_selected_images_list()
        self._log(f"Selected {len(self.selected_files)} files.")

    def _pick_output_dir(self) -> None:
        selected = filedialog.askdirectory(title="Select output folder")
        if not selected:
            return

        self.output_dir = Path(selected)
        self._refresh_output_label()
        self._log(f"Output folder set to: {self.output_dir}")

    def _on_quality_change(self, value: float) -> None:
        self.quality_value.set(str(int(value)))

    def _max_size_label(self, value: int) -> str:
        return ORIGINAL_SIZE_LABEL if value <= 0 else str(value)

    def _selected_max_dimension(self) -> int:
        label = self.max_size_var.get()
        return 0 if label == ORIGINAL_SIZE_LABEL else int(label)

    def _start_compression(self) -> None:
        if not self.selected_files:
            messagebox.showerror("Missing images", "Please select at least one image.")
            return

        try:
            sources = load_sources(self.selected_files)
        except OSError as error:
            messagebox.showerror("Could not read files", str(error))
            return

        params = ProcessingParams(
            quality=int(float(self.quality_slider.get())),
            max_dimension=self._selected_max_dimension(),
            output_format=OutputFormat.parse(self.format_var.get()),
        )

        self._clear_logs()
        self.progress_bar.set(0)
        self.progress_label.configure(text=f"Progress: 0/{len(sources)}")

        self.cancel_event = threading.Event()
        self.start_button.configure(state="disabled")
        self.cancel_button.configure(state="normal")
        self._log(
            f"Starting compression: quality {params.quality}, "
            f"format {params.output_format.value}, max dimension {params.max_dimension or 'unlimited'}."
        )

        worker = threading.Thread(target=self._run_compression, args=(sources, params), daemon=True)
        worker.start()

    def _cancel_compression(self) -> None:
        self.cancel_event.set()
        self.cancel_button.configure(state="disabled")
        self._log("Cancelling: files already in progress will finish.")

    def _run_compression(self, sources: list[SourceImage], params: ProcessingParams) -> None:
        result: BatchResult | None = None
        try:
            result = self.converter.run(
                sources,
                params,
                on_progress=self._on_progress,
                on_log=self._log,
                cancel_event=self.cancel_event,
            )
        finally:
            self.after(0, lambda: self._finish_compression(result))

    def _finish_compression(self, result: BatchResult | None) -> None:
        self.start_button.configure(state="normal")
        self.cancel_button.configure(state="disabled")

        if result is None:
            self._log("Compression stopped by an unexpected error. See the console for details.")
            return

        self._append_results(result)
        summary = (
            f"Done. Compressed: {result.succeeded}/{result.total}. "
            f"Failed: {result.failed}. "
            f"Compression: {result.compression_rate_percent:.2f}% "
            f"({format_bytes(result.input_total_bytes)} → {format_bytes(result.output_total_bytes)})."
        )
        self._log(summary)
        self.tabs.set("Results")

    def _on_progress(self, current: int, total: int) -> None:
        def update() -> None:
            fraction = current / total if total else 0
            self.progress_bar.set(fraction)
            self.progress_label.configure(text=f"Progress: {current}/{total}")

        self.after(0, update)

    def _log(self, message: str) -> None:
        def append() -> None:
            self.logs_text.insert("end", message + "\n")
            self.logs_text.see("end")

        self.after(0, append)

    def _clear_logs(self) -> None:
        self.logs_text.delete("1.0", "end")

    def _refresh_output_label(self) -> None:
        if self.output_dir is None:
            self.output_label.configure(text="Output: not selected")
            return

        effective = resolve_effective_output_dir(self.output_dir)
        self.output_label.configure(text=f"Output: {effective}")

    def _refresh_selected_images_list(self) -> None:
        self.selected_images_text.configure(state="normal")
        self.selected_images_text.delete("1.0", "end")
        for path in self.selected_files:
            self.selected_images_text.insert("end", f"{path.name}\n")
        self.selected_images_text.configure(state="disabled")

    def _append_results(self, batch: BatchResult) -> None:
        self.outcomes.extend(batch.outcomes)
        for outcome in batch.outcomes:
            if isinstance(outcome, ProcessingError):
                self._add_error_row(outcome)
            else:
                self.results.append(outcome)
                self._add_result_row(outcome)

        self.results_status_label.configure(text=f"{len(self.results)} compressed image(s) ready.")

    def _add_result_row(self, result: ProcessingResult) -> None:
        row = ctk.CTkFrame(self.results_scroll)
        row.grid(sticky="ew", padx=0, pady=(0, 6))
        row.grid_columnconfigure(0, weight=1)

        header = f"{result.filename}  [{result.codec.extension.upper()}]  {result.width}x{result.height}"
        ctk.CTkLabel(row, text=header, anchor="w").grid(row=0, column=0, sticky="w", padx=10, pady=(8, 0))

        stats = (
            f"Original: {format_bytes(result.original_size)}   "
            f"Compressed: {format_bytes(result.compressed_size)}   "
            f"Saved: {result.savings_percent}%"
        )
        ctk.CTkLabel(row, text=stats, anchor="w").grid(row=1, column=0, sticky="w", padx=10, pady=(0, 8))

        save_button = ctk.CTkButton(row, text="Save", width=90, command=lambda item=result: self._save_result(item))
        save_button.grid(row=0, column=1, rowspan=2, padx=6, pady=8)

        copy_button = ctk.CTkButton(row, text="Copy name", width=90)
        copy_button.configure(command=lambda item=result, button=copy_button: self._copy_name(item, button))
        copy_button.grid(row=0, column=2, rowspan=2, padx=(0, 10), pady=8)

        previews = ctk.CTkFrame(row, fg_color="transparent")
        previews.grid(row=2, column=0, columnspan=3, sticky="w", padx=10, pady=(0, 8))
        for column, (caption, data) in enumerate((("Before", result.original_data), ("After", result.data))):
            self._preview_label(previews, caption, data).grid(row=0, column=column, padx=(0, 10))

        self.result_rows.append(row)

    def _preview_label(self, parent: ctk.CTkFrame, caption: str, data: bytes) -> ctk.CTkLabel:
        try:
            thumbnail = make_thumbnail(data)
        except OSError as error:
            logger.warning("Could not build %s preview: %s", caption.lower(), error)
            return ctk.CTkLabel(parent, text=f"{caption}: no preview")

        image = ctk.CTkImage(light_image=thumbnail, dark_image=thumbnail, size=thumbnail.size)
        return ctk.CTkLabel(parent, text=caption, image=image, compound="top")

    def _add_error_row(self, error: ProcessingError) -> None:
        row = ctk.CTkFrame(self.results_scroll)
        row.grid(sticky="ew", padx=0, pady=(0, 6))
        row.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(row, text=f"{error.filename}  [Error]", anchor="w").grid(row=0, column=0, sticky="w", padx=10, pady=(8, 0))
        ctk.CTkLabel(row, text=error.message, anchor="w", text_color="#fca5a5").grid(
            row=1, column=0, sticky="w", padx=10, pady=(0, 8)
        )

        self.result_rows.append(row)

    def _copy_name(self, result: ProcessingResult, button: ctk.CTkButton) -> None:
        try:
            self.clipboard_clear()
            self.clipboard_append(result.output_name)
        except Exception as error:
            logger.warning("Clipboard error: %s", error)
            button.configure(text="Clipboard error")
            self.after(1400, lambda: button.configure(text="Copy name"))
            return

        button.configure(text="Copied!")
        self.after(1200, lambda: button.configure(text="Copy name"))

    def _save_result(self, result: ProcessingResult) -> None:
        extension = f".{result.codec.extension}"
        selected = filedialog.asksaveasfilename(
            title="Save compressed image",
            initialfile=result.output_name,
            defaultextension=extension,
            filetypes=[(result.codec.extension.upper(), f"*{extension}")],
        )
        if not selected:
            return

        target = Path(selected)
        try:
            write_output(target.parent, result, target.name)
        except OSError as error:
            messagebox.showerror("Save failed", str(error))
            return
        self._log(f"Saved: {target}")

    def _save_all_results(self) -> None:
        if not self.results:
            messagebox.showinfo("Nothing to save", "Compress some images first.")
            return

        if self.output_dir is None:
            messagebox.showerror("Missing output folder", "Please select an output folder.")
            return

        effective_output_dir = resolve_effective_output_dir(self.output_dir)
        output_names = [result.output_name for result in self.results]

        messages: list[str] = []
        repeated = find_repeated_names(output_names)
        if repeated:
            messages.append(f"- Several inputs share an output name: {', '.join(repeated[:5])}")

        conflicts = detect_output_conflicts(effective_output_dir, output_names)
        if conflicts.report_exists:
            messages.append("- A compression report already exists")
        if conflicts.duplicate_files:
            preview = ", ".join(conflicts.duplicate_files[:5])
            if len(conflicts.duplicate_files) > 5:
                preview += ", ..."
            messages.append(f"- Existing output images found: {preview}")

        if messages:
            proceed = messagebox.askyesno(
                "Output conflicts detected",
                "Saving will overwrite files:\n\n" + "\n".join(messages) + "\n\nDo you want to proceed?",
            )
            if not proceed:
                self._log("Save cancelled by user due to output conflicts.")
                return

        try:
            written = write_outputs(effective_output_dir, self.results)
            report_path = write_report(effective_output_dir, self.outcomes)
        except OSError as error:
            messagebox.showerror("Save failed", str(error))
            return

        summary = f"Saved {len(written)} image(s) and {report_path.name} to {effective_output_dir}."
        self._log(summary)
        messagebox.showinfo("Results saved", summary)

    def _clear_results(self) -> None:
        for row in self.result_rows:
            row.destroy()
        self.result_rows.clear()
        self.outcomes.clear()
        self.results.clear()
        self.results_status_label.configure(text="Results cleared. Select new images to compress.")
