import logging
import sys
import tkinter as tk
from tkinter import filedialog
from viewer import ImageViewer, IMAGE_TYPES

class ImageApp(tk.Tk):
    def __init__(self, file_path=None):
        super().__init__()
        self.title("img-ops viewer")
        self.geometry("1100x720")

        # Menu
        menubar = tk.Menu(self)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Image", command=self.open_image)
        file_menu.add_command(label="Save Result", command=lambda: self.viewer.save_result())
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.quit)
        menubar.add_cascade(label="File", menu=file_menu)
        self.config(menu=menubar)

        self.viewer = ImageViewer(self, file_path)

    def open_image(self):
        file_path = filedialog.askopenfilename(filetypes=IMAGE_TYPES)
        if file_path:
            self.viewer.load_first(file_path)

def main():
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    app = ImageApp(sys.argv[1] if len(sys.argv) > 1 else None)
    app.mainloop()

if __name__ == "__main__":
    main()
