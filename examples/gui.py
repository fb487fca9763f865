# examples/gui.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

import random

from cg2d.errors import DegenerateSimplexError, OutOfBoundsError
from cg2d.voronoi import Voronoi

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.collections import PolyCollection

BOX = 100.0  # точки генеруємо в квадраті [0, BOX]^2


def generate_random_points(n: int):
    """n випадкових точок у квадраті [0, BOX]^2."""
    return [(random.uniform(0, BOX), random.uniform(0, BOX)) for _ in range(n)]


def parse_points_from_text(text: str):
    """
    Парсить точки з багаторядкового тексту.
    Кожен рядок: x y або x, y.
    Повертає список (x, y) як float.
    """
    points = []
    lines = text.splitlines()
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue  # пропускаємо пусті строки і коментарі
        line = line.replace(",", " ")
        parts = line.split()
        if len(parts) != 2:
            raise ValueError(f"Рядок {lineno}: очікується 2 числа, отримано: {len(parts)}")
        try:
            x, y = map(float, parts)
        except ValueError:
            raise ValueError(f"Рядок {lineno}: не вдалось прочитати числа '{line}'")
        points.append((x, y))
    if not points:
        raise ValueError("Потрібна щонайменше одна точка.")
    return points


class VoronoiApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("cg2d: Delaunay / Voronoi")
        self.geometry("800x750")

        self.fig = None
        self.ax = None
        self.canvas = None

        self._build_widgets()

    def _build_widgets(self):
        main = ttk.Frame(self, padding=10)
        main.pack(fill="both", expand=True)

        # --- Режим вводу ---
        mode_frame = ttk.LabelFrame(main, text="Режим вводу точок")
        mode_frame.pack(fill="x", pady=5)

        self.input_mode = tk.StringVar(value="random")
        ttk.Radiobutton(
            mode_frame, text="Випадкові точки в квадраті",
            variable=self.input_mode, value="random", command=self._update_mode_state,
        ).grid(row=0, column=0, sticky="w", padx=5, pady=2)
        ttk.Radiobutton(
            mode_frame, text="Ручне введення точок",
            variable=self.input_mode, value="manual", command=self._update_mode_state,
        ).grid(row=0, column=1, sticky="w", padx=5, pady=2)

        ttk.Label(mode_frame, text="Кількість випадкових точок:").grid(row=1, column=0, sticky="w", padx=5, pady=5)
        self.n_entry = ttk.Entry(mode_frame, width=10)
        self.n_entry.insert(0, "50")
        self.n_entry.grid(row=1, column=1, sticky="w", padx=5, pady=5)

        self.show_delaunay = tk.BooleanVar(value=True)
        ttk.Checkbutton(mode_frame, text="Показувати трикутники", variable=self.show_delaunay).grid(
            row=2, column=0, sticky="w", padx=5, pady=2
        )

        # --- Поле для ручного вводу ---
        manual_frame = ttk.LabelFrame(main, text="Ручне введення точок (одна точка - один рядок)")
        manual_frame.pack(fill="x", pady=5)

        self.points_text = tk.Text(manual_frame, height=5, wrap="none")
        self.points_text.pack(fill="x", padx=5, pady=5)
        self.points_text.insert("1.0", "# Приклад:\n# 10 10\n# 50 20\n# 30 70\n")

        ttk.Button(main, text="Побудувати діаграму", command=self.run_pipeline).pack(fill="x", pady=10)

        # --- Результати ---
        result_frame = ttk.LabelFrame(main, text="Результати")
        result_frame.pack(fill="x", pady=5)

        self.sites_var = tk.StringVar(value="—")
        self.tris_var = tk.StringVar(value="—")
        self.valid_var = tk.StringVar(value="—")
        for row, (label, var) in enumerate([
            ("Сайти:", self.sites_var),
            ("Трикутників:", self.tris_var),
            ("Валідація:", self.valid_var),
        ]):
            ttk.Label(result_frame, text=label).grid(row=row, column=0, sticky="w", padx=5, pady=2)
            ttk.Label(result_frame, textvariable=var).grid(row=row, column=1, sticky="w", padx=5, pady=2)

        # --- Фрейм для графіка ---
        plot_frame = ttk.LabelFrame(main, text="Візуалізація")
        plot_frame.pack(fill="both", expand=True, pady=5)

        self.fig = Figure(figsize=(5, 5))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=plot_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

        self._update_mode_state()

    def _update_mode_state(self):
        if self.input_mode.get() == "random":
            self.n_entry.configure(state="normal")
        else:
            self.n_entry.configure(state="disabled")

    def update_plot(self, vor: Voronoi):
        self.ax.clear()
        sites = vor.sites_array()
        if len(sites) == 0:
            self.ax.set_title("Немає точок")
            self.canvas.draw()
            return

        self.ax.add_collection(PolyCollection(vor.regions(), facecolors="none", edgecolors="tab:blue", linewidths=0.8))
        if self.show_delaunay.get():
            self.ax.add_collection(
                PolyCollection(vor.triangles_array(), facecolors="none", edgecolors="lightgray", linewidths=0.4)
            )
        self.ax.plot(sites[:, 0], sites[:, 1], "k.", markersize=3)

        # вікно навколо сайтів, а не навколо обмежувального трикутника
        lo = sites.min(axis=0)
        hi = sites.max(axis=0)
        pad = max(float((hi - lo).max()) * 0.1, 1.0)
        self.ax.set_xlim(lo[0] - pad, hi[0] + pad)
        self.ax.set_ylim(lo[1] - pad, hi[1] + pad)
        self.ax.set_aspect("equal")
        self.ax.set_title("Voronoi (cells) / Delaunay (triangles)")
        self.canvas.draw()

    def run_pipeline(self):
        if self.input_mode.get() == "random":
            try:
                n = int(self.n_entry.get())
                if n < 0:
                    raise ValueError
            except ValueError:
                messagebox.showerror("Помилка", "Кількість точок має бути невід’ємним цілим числом.")
                return
            points = generate_random_points(n)
        else:
            raw_text = self.points_text.get("1.0", "end").strip()
            try:
                points = parse_points_from_text(raw_text)
            except ValueError as e:
                messagebox.showerror("Помилка парсингу точок", str(e))
                return

        vor = Voronoi()
        try:
            vor.add_points(points)
        except (OutOfBoundsError, DegenerateSimplexError) as e:
            messagebox.showerror("Помилка виконання", str(e))
            return

        report = vor.delaunay.validate()
        self.update_plot(vor)

        self.sites_var.set(str(len(vor.sites())))
        self.tris_var.set(str(len(vor.delaunay)))
        problems = {k: v for k, v in report.items() if k != "tris_alive" and v}
        self.valid_var.set("Є проблеми (див. консоль)" if problems else "OK")
        print("VALIDATION:", report)


if __name__ == "__main__":
    app = VoronoiApp()
    app.mainloop()
