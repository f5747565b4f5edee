import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from PIL import Image, ImageTk
import viewer_style as style
from image_codec import load_image, save_image, to_pil
from img_errors import ImageOpsError
from operations import OPERATIONS, run_operation
from pixel_matrix import matrix_height, matrix_width

IMAGE_TYPES = [("Image files", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.pcx"), ("All files", "*.*")]
PARAM_NAMES = ("factor", "size", "sigma", "rank", "width", "height")
PARAM_TYPES = {"factor": float, "sigma": float}
ZOOM_STEP = 1.25
MIN_ZOOM, MAX_ZOOM = 1 / 16, 32.0


def step_zoom(zoom, steps):
    """Zoom after `steps` wheel or button notches, kept within [MIN_ZOOM, MAX_ZOOM]."""
    return min(MAX_ZOOM, max(MIN_ZOOM, zoom * ZOOM_STEP ** steps))


def wheel_steps(event):
    """Notches from a wheel event: +1 to zoom in, -1 to zoom out, 0 for none.

    X11 reports wheel motion as buttons 4 and 5, other platforms through delta.
    """
    if getattr(event, "num", None) == 4:
        return 1
    if getattr(event, "num", None) == 5:
        return -1
    delta = getattr(event, "delta", 0) or 0
    return (delta > 0) - (delta < 0)


class ImageViewer(tk.Frame):
    def __init__(self, master, file_path=None):
        super().__init__(master, bg=style.BG_MAIN)
        self.master = master
        self.pack(fill="both", expand=True)

        # === Top Toolbar ===
        toolbar = tk.Frame(self, bg=style.BG_TOOLBAR, padx=10, pady=8)
        toolbar.pack(side="top", fill="x")

        for text, command in (("Open Image", self.open_image),
                              ("Open Second", self.open_second),
                              ("Apply", self.apply_operation),
                              ("Save Result", self.save_result),
                              ("Zoom In", lambda: self.zoom_by(1)),
                              ("Zoom Out", lambda: self.zoom_by(-1))):
            tk.Button(toolbar, text=text, command=command,
                      bg=style.BG_BUTTON, fg=style.FG_BUTTON,
                      font=style.FONT_BUTTON, relief="flat",
                      padx=10, pady=4).pack(side="left", padx=5)

        # === Main Content Layout ===
        main_frame = tk.Frame(self, bg=style.BG_MAIN)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        # === Canvas with Scrollbars ===
        canvas_frame = tk.Frame(main_frame, bg=style.BG_MAIN)
        canvas_frame.pack(side="left", fill="both", expand=True, padx=(0, 10))

        self.canvas = tk.Canvas(canvas_frame, bg=style.BG_PANEL, cursor="cross")
        self.canvas.pack(side="left", fill="both", expand=True)

        self.scroll_y = tk.Scrollbar(canvas_frame, orient="vertical", command=self.canvas.yview)
        self.scroll_y.pack(side="right", fill="y")
        self.scroll_x = tk.Scrollbar(main_frame, orient="horizontal", command=self.canvas.xview)
        self.scroll_x.pack(side="bottom", fill="x")

        self.canvas.configure(yscrollcommand=self.scroll_y.set, xscrollcommand=self.scroll_x.set)

        # === Bindings ===
        self.canvas.bind("<Button-1>", self.get_pixel_info)
        self.canvas.bind("<ButtonPress-2>", lambda e: self.canvas.scan_mark(e.x, e.y))
        self.canvas.bind("<B2-Motion>", lambda e: self.canvas.scan_dragto(e.x, e.y, gain=1))
        for seq in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self.canvas.bind(seq, lambda e: self.zoom_by(wheel_steps(e)))

        # === Operation Panel ===
        panel = tk.Frame(main_frame, bg=style.BG_PANEL, bd=2,
                         relief="groove", padx=15, pady=15)
        panel.pack(side="right", fill="y")

        tk.Label(panel, text="Operation", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0, 5))

        self.op_var = tk.StringVar(value="not")
        op_box = ttk.Combobox(panel, textvariable=self.op_var, state="readonly",
                              values=list(OPERATIONS), width=24)
        op_box.pack(anchor="w", pady=(0, 5))
        op_box.bind("<<ComboboxSelected>>", lambda _e: self.show_op_help())

        self.op_help = tk.Label(panel, text="", font=style.FONT_TEXT, justify="left",
                                wraplength=220, bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.op_help.pack(anchor="w", pady=(0, 10))

        self.param_vars = {}
        for name in PARAM_NAMES:
            row = tk.Frame(panel, bg=style.BG_PANEL)
            row.pack(anchor="w", fill="x", pady=2)
            tk.Label(row, text=name, width=8, anchor="w", font=style.FONT_TEXT,
                     bg=style.BG_PANEL, fg=style.FG_TEXT).pack(side="left")
            var = tk.StringVar()
            tk.Entry(row, textvariable=var, width=10).pack(side="left")
            self.param_vars[name] = var

        tk.Frame(panel, height=2, bg="#e0e0e0").pack(fill="x", pady=10)
        tk.Label(panel, text="Pixel Info", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0, 5))

        self.pixel_label = tk.Label(panel,
            text="Click on the image to view pixel RGB values.",
            font=style.FONT_TEXT, justify="left", bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.pixel_label.pack(anchor="w", pady=(0, 10))

        self.color_preview = tk.Canvas(panel, width=80, height=50,
                                       bg="#cccccc", bd=1, relief="solid")
        self.color_preview.pack(anchor="w", pady=(0, 10))

        self.status = tk.Label(panel, text="", font=style.FONT_MONO, justify="left",
                               bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.status.pack(anchor="w")

        # === Initialize Variables ===
        self.first = None
        self.second = None
        self.shown = None
        self.tk_img = None
        self.zoom_factor = 1.0
        self.show_op_help()
        if file_path:
            self.load_first(file_path)

    # === File Handling ===
    def _ask_matrix(self, file_path=None):
        file_path = file_path or filedialog.askopenfilename(filetypes=IMAGE_TYPES)
        if not file_path:
            return None
        try:
            return load_image(file_path)
        except ImageOpsError as e:
            messagebox.showerror("Error", f"Failed to open image: {e}")
            return None

    def open_image(self):
        self.load_first()

    def load_first(self, file_path=None):
        matrix = self._ask_matrix(file_path)
        if matrix is not None:
            self.first = matrix
            self.zoom_factor = 1.0
            self.show_matrix(matrix)

    def open_second(self):
        matrix = self._ask_matrix()
        if matrix is not None:
            self.second = matrix
            self.status.config(text=f"Second image: {matrix_width(matrix)} × {matrix_height(matrix)}")

    def save_result(self):
        if self.shown is None:
            return
        file_path = filedialog.asksaveasfilename(defaultextension=".png",
                                                 filetypes=[("PNG", "*.png"), ("All files", "*.*")])
        if file_path:
            try:
                save_image(self.shown, file_path)
            except ImageOpsError as e:
                messagebox.showerror("Error", f"Failed to save image: {e}")

    # === Operations ===
    def show_op_help(self):
        op = OPERATIONS[self.op_var.get()]
        needs = f"\nParameters: {', '.join(op.params)}" if op.params else ""
        second = "\nNeeds a second image." if op.arity == 2 else ""
        self.op_help.config(text=f"{op.description}{needs}{second}")

    def read_params(self):
        params = {}
        for name, var in self.param_vars.items():
            text = var.get().strip()
            if text:
                params[name] = PARAM_TYPES.get(name, int)(text)
        return params

    def apply_operation(self):
        if self.first is None:
            messagebox.showinfo("No image", "Open an image first.")
            return
        op = OPERATIONS[self.op_var.get()]
        images = [self.first] if op.arity == 1 else [self.first, self.second]
        if any(m is None for m in images):
            messagebox.showinfo("Second image", f"'{op.name}' needs a second image.")
            return
        try:
            params = self.read_params()
            result = run_operation(op.name, images, **params)
        except ValueError as e:
            messagebox.showerror("Invalid parameter", str(e))
            return
        except ImageOpsError as e:
            messagebox.showerror("Error", str(e))
            return
        self.show_matrix(result)

    # === Display & Zoom ===
    def show_matrix(self, matrix):
        self.shown = matrix
        self.image = to_pil(matrix)
        self.status.config(text=f"Shown: {self.image.width} × {self.image.height}")
        self.display_image()

    def display_image(self):
        if self.shown is not None:
            w = max(1, int(self.image.width * self.zoom_factor))
            h = max(1, int(self.image.height * self.zoom_factor))
            img_resized = self.image.resize((w, h), Image.NEAREST)
            self.tk_img = ImageTk.PhotoImage(img_resized)
            self.canvas.delete("all")
            self.canvas.create_image(0, 0, anchor="nw", image=self.tk_img)
            self.canvas.config(scrollregion=self.canvas.bbox("all"))

    def zoom_by(self, steps):
        zoom = step_zoom(self.zoom_factor, steps)
        if zoom != self.zoom_factor:
            self.zoom_factor = zoom
            self.display_image()

    # === Pixel Info ===
    def get_pixel_info(self, event):
        if self.shown is not None:
            x = int(self.canvas.canvasx(event.x) / self.zoom_factor)
            y = int(self.canvas.canvasy(event.y) / self.zoom_factor)
            if 0 <= x < matrix_width(self.shown) and 0 <= y < matrix_height(self.shown):
                r, g, b = self.shown[x][y]
                self.pixel_label.config(text=f"X: {x}\nY: {y}\nR: {r}\nG: {g}\nB: {b}")
                self.color_preview.config(bg=f"#{r:02x}{g:02x}{b:02x}")
