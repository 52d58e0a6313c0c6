"""
Time-Travel TicTacToe UI
A graphical interface for the game using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Game status (next player / winner / draw)
- The move list (click an entry to jump back to it)
- Sort-order toggle and New Game button

All game rules live in the engine; this module only forwards clicks and
redraws from the engine's read model.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from engine import Cell, GameConfig, GameEngine, HistoryView

logger = logging.getLogger(__name__)


class UIConfig:
    """
    Look and feel of the Tkinter window.
    """

    WINDOW_TITLE = "Time-Travel TicTacToe"
    WINDOW_SIZE = "720x480"

    # ==================== COLORS ====================
    BG = '#1a1a2e'
    CELL_BG = '#16213e'
    HIGHLIGHT_BG = '#ffd700'
    TITLE_FG = '#00d4ff'
    STATUS_FG = '#ffd700'
    PLAYER_FG = {
        Cell.X: '#f87171',
        Cell.O: '#10b981',
        Cell.EMPTY: 'white',
    }

    # ==================== FONTS ====================
    CELL_FONT = ('Segoe UI', 24, 'bold')
    TITLE_FONT = ('Segoe UI', 16, 'bold')
    STATUS_FONT = ('Segoe UI', 12)
    MOVE_FONT = ('Segoe UI', 10)
    CURRENT_MOVE_FONT = ('Segoe UI', 10, 'bold')


class TicTacToeUI:
    """
    Main UI class for Time-Travel TicTacToe.
    """

    def __init__(self, engine: Optional[GameEngine] = None, view: Optional[HistoryView] = None):
        """Initialize the UI."""
        self.engine = engine or GameEngine()
        self.view = view or HistoryView()
        self.move_buttons = []

        # Create UI
        self._create_ui()
        self._refresh()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title(UIConfig.WINDOW_TITLE)
        self.root.configure(bg=UIConfig.BG)
        self.root.geometry(UIConfig.WINDOW_SIZE)

        # Main container
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=UIConfig.BG)
        style.configure('TLabel', background=UIConfig.BG, foreground='white')
        style.configure('Title.TLabel', font=UIConfig.TITLE_FONT, foreground=UIConfig.TITLE_FG)
        style.configure('Status.TLabel', font=UIConfig.STATUS_FONT, foreground=UIConfig.STATUS_FG)

        # Left panel - board
        left_frame = ttk.Frame(main_frame)
        left_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 10))

        ttk.Label(left_frame, text="Game Board", style='Title.TLabel').pack(pady=(0, 5))

        self.status_label = ttk.Label(left_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        board_frame = ttk.Frame(left_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(GameConfig.CELL_COUNT):
            row, col = divmod(index, GameConfig.BOARD_SIZE)
            cell = tk.Button(
                board_frame,
                text="",
                font=UIConfig.CELL_FONT,
                width=3,
                height=1,
                bg=UIConfig.CELL_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=row, column=col, padx=2, pady=2)
            self.board_cells.append(cell)

        # Control buttons
        control_frame = ttk.Frame(left_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="Quit",
            font=('Segoe UI', 11),
            bg='#ef4444',
            fg='white',
            width=12,
            command=self._quit
        ).pack(side=tk.LEFT, padx=5)

        # Right panel - move history
        right_frame = ttk.Frame(main_frame, width=320)
        right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        right_frame.pack_propagate(False)

        ttk.Label(right_frame, text="Moves", style='Title.TLabel').pack(pady=(0, 5))

        self.sort_btn = tk.Button(
            right_frame,
            text=self.view.sort_label,
            font=UIConfig.MOVE_FONT,
            bg='#2d3748',
            fg='white',
            command=self._toggle_sort
        )
        self.sort_btn.pack(fill=tk.X, pady=(0, 10))

        self.moves_frame = ttk.Frame(right_frame)
        self.moves_frame.pack(fill=tk.BOTH, expand=True)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_cell_click(self, index: int):
        """Play a cell. Invalid clicks are ignored."""
        result = self.engine.apply_move(index)
        if not result.ok:
            logger.debug("Ignored click on cell %d: %s", index, result.message)
            return
        self._refresh()

    def _on_move_click(self, step: int):
        """Jump to a step of the history."""
        if self.engine.jump_to(step).ok:
            self._refresh()

    def _toggle_sort(self):
        """Reverse the move list order."""
        self.view.toggle_sort_order()
        self._refresh()

    def _new_game(self):
        """Start over."""
        self.engine.new_game()
        self._refresh()

    def _refresh(self):
        """Redraw everything from one engine snapshot."""
        state = self.engine.state
        status = self.engine.status_of(state)
        highlighted = self.view.highlighted_cells(state)

        self._update_board_display(state.current_board, highlighted)
        self.status_label.configure(text=self.view.status_text(status))
        self.sort_btn.configure(text=self.view.sort_label)
        self._update_move_list(state)

    def _update_board_display(self, board, highlighted):
        """Update the board grid display."""
        for index, cell in enumerate(board):
            self.board_cells[index].configure(
                text=cell.symbol,
                bg=UIConfig.HIGHLIGHT_BG if index in highlighted else UIConfig.CELL_BG,
                fg=UIConfig.PLAYER_FG[cell]
            )

    def _update_move_list(self, state):
        """Rebuild the list of jump buttons."""
        for btn in self.move_buttons:
            btn.destroy()
        self.move_buttons = []

        for desc in self.view.ordered_move_descriptions(state):
            btn = tk.Button(
                self.moves_frame,
                text=desc.label,
                anchor='w',
                font=UIConfig.CURRENT_MOVE_FONT if desc.is_current else UIConfig.MOVE_FONT,
                bg=UIConfig.CELL_BG,
                fg='white',
                command=lambda s=desc.step: self._on_move_click(s)
            )
            btn.pack(fill=tk.X, pady=1)
            self.move_buttons.append(btn)

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    from main import setup_logging
    setup_logging(GameConfig.LOG_LEVEL)
    ui = TicTacToeUI()
    ui.run()


if __name__ == "__main__":
    main()
