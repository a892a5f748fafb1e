import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Mark(Enum):
    EMPTY = ''
    X = 'X'
    O = 'O'

    @property
    def opponent(self):
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        return Mark.EMPTY


class Outcome(Enum):
    UNDECIDED = 'undecided'
    WIN = 'win'
    DRAW = 'draw'


BOARD_SIZE = 9

# Rows, columns, diagonals; index = row * 3 + col
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class TicTacToeLogic:
    """Board, turn, round result and match score for two players on one machine.

    Invalid moves are rejected by returning False and leave the state
    untouched; nothing here raises for bad input.
    """

    def __init__(self):
        self.x_wins = 0
        self.o_wins = 0
        self.reset_game()

    def reset_game(self):
        """Start a new round. Scores are kept."""
        self.board = [Mark.EMPTY] * BOARD_SIZE
        self.current_player = Mark.X  # X always moves first
        self.outcome = Outcome.UNDECIDED
        self.winner = None
        self.winning_line = ()
        logger.debug("Board cleared, X to move")

    def reset_all(self):
        """Start a new match: clear the board and zero both scores."""
        self.reset_game()
        self.x_wins = 0
        self.o_wins = 0
        logger.info("Match reset, scores zeroed")

    def make_move(self, position):
        if not self._in_range(position):
            logger.debug("Rejected move at %r: out of range", position)
            return False
        if self.is_game_over():
            logger.debug("Rejected move at %d: game is over", position)
            return False
        if self.board[position] is not Mark.EMPTY:
            logger.debug("Rejected move at %d: cell taken by %s", position, self.board[position].value)
            return False

        mover = self.current_player
        self.board[position] = mover

        line = self._find_win(mover)
        if line:
            self.outcome = Outcome.WIN
            self.winner = mover
            self.winning_line = line
            if mover is Mark.X:
                self.x_wins += 1
            else:
                self.o_wins += 1
            logger.info("%s wins on line %s (score X %d : O %d)", mover.value, line, self.x_wins, self.o_wins)
        elif self._board_full():
            self.outcome = Outcome.DRAW
            logger.info("Round ends in a draw (score X %d : O %d)", self.x_wins, self.o_wins)
        else:
            self.current_player = mover.opponent

        return True

    def _find_win(self, mark):
        for line in WIN_LINES:
            if all(self.board[i] is mark for i in line):
                return line
        return ()

    def _board_full(self):
        return Mark.EMPTY not in self.board

    @staticmethod
    def _in_range(position):
        # bool is an int subclass but never a valid cell index
        if isinstance(position, bool) or not isinstance(position, int):
            return False
        return 0 <= position < BOARD_SIZE

    # --- queries used by the view ---

    def get_current_player(self):
        return self.current_player

    def get_winner(self):
        return self.winner

    def get_outcome(self):
        return self.outcome

    def is_game_over(self):
        return self.outcome is not Outcome.UNDECIDED

    def is_draw(self):
        return self.outcome is Outcome.DRAW

    def get_player_at(self, position):
        """Mark at ``position``; Mark.EMPTY for anything off the board."""
        if not self._in_range(position):
            return Mark.EMPTY
        return self.board[position]

    def get_board(self):
        return tuple(self.board)

    def get_winning_line(self):
        return self.winning_line

    def get_scores(self):
        """(X wins, O wins) for the current match."""
        return self.x_wins, self.o_wins
