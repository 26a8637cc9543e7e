"""PyQt6 front end: modal dialogs that act as the player's strategy."""
from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6 import QtWidgets

from ..core.cards import Card
from ..core.game import Game, GameOptions
from ..core.moves import Move, legal_moves
from ..core.scoring import score

_BUTTON_LABELS = {Move.HIT: "Hit", Move.STAND: "Stand", Move.SPLIT: "Split", Move.DOUBLE: "Double"}


def _describe(cards: Sequence[Card]) -> str:
    return f"{' '.join(str(card) for card in cards)} ({score(cards)})"


class QtStrategy:
    """Asks the human for bets and moves through modal dialogs."""

    def __init__(self, window: "GameWindow", default_bet: int = 10) -> None:
        self.window = window
        self.default_bet = default_bet

    def bet(self, reshuffled: bool) -> int:
        label = "New shoe. Your bet:" if reshuffled else "Your bet:"
        amount, ok = QtWidgets.QInputDialog.getInt(
            self.window, "Place your bet", label, self.default_bet, 0, 1_000_000
        )
        if not ok:
            return self.default_bet
        self.default_bet = amount
        return amount

    def play(self, hand: List[Card], dealer_up_card: Card) -> Move:
        allowed = legal_moves(hand)
        while True:
            box = QtWidgets.QMessageBox(self.window)
            box.setWindowTitle("Your move")
            box.setText(f"Player: {_describe(hand)}\nDealer shows: {dealer_up_card}")
            buttons = {}
            for move, label in _BUTTON_LABELS.items():
                if move in allowed:
                    buttons[box.addButton(label, QtWidgets.QMessageBox.ButtonRole.ActionRole)] = move
            box.exec()
            move = buttons.get(box.clickedButton())
            if move is not None:
                return move

    def summary(self, hands: List[List[Card]], dealer_hand: List[Card]) -> None:
        lines = [f"Player: {_describe(cards)}" for cards in hands]
        lines.append(f"Dealer: {_describe(dealer_hand)}")
        self.window.log("\n".join(lines))


class GameWindow(QtWidgets.QMainWindow):
    def __init__(self, options: GameOptions) -> None:
        super().__init__()
        self.options = options
        self.setWindowTitle("Blackjack Simulator")
        self.resize(480, 560)
        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(central)
        self.history = QtWidgets.QPlainTextEdit()
        self.history.setReadOnly(True)
        layout.addWidget(self.history, stretch=1)
        self.play_btn = QtWidgets.QPushButton(f"Play {options.hands} hands")
        self.play_btn.clicked.connect(self.on_play)
        layout.addWidget(self.play_btn)
        self.setCentralWidget(central)
        self.status = self.statusBar()
        self.status.showMessage("Bankroll: 0")

    def log(self, text: str) -> None:
        self.history.appendPlainText(text)
        self.history.appendPlainText("")

    def on_play(self) -> None:
        self.play_btn.setEnabled(False)
        game = Game(self.options)
        try:
            bankroll = game.play(QtStrategy(self))
        finally:
            self.play_btn.setEnabled(True)
        self.status.showMessage(f"Bankroll: {bankroll}")
        self.log(
            f"Finished: {game.stats.wins} won, {game.stats.losses} lost, "
            f"{game.stats.pushes} pushed. Bankroll {bankroll}."
        )


def launch_qt(options: GameOptions, argv: Optional[Sequence[str]] = None) -> int:
    app = QtWidgets.QApplication(list(argv or []))
    window = GameWindow(options)
    window.show()
    return app.exec()


__all__ = ["launch_qt", "QtStrategy", "GameWindow"]
