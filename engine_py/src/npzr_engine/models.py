"""Game models and data structures"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Union

from .rules import RuleConfig, default_rules


class Character(str, Enum):
    NINJA = "ninja"
    PIRATE = "pirate"
    ZOMBIE = "zombie"
    ROBOT = "robot"
    WILD = "wild"  # marks an unfixed dimension, never scored


class BodyPart(str, Enum):
    HEAD = "head"
    TORSO = "torso"
    LEGS = "legs"
    WILD = "wild"


class CardType(str, Enum):
    REGULAR = "regular"
    WILD_CHARACTER = "wild_character"
    WILD_POSITION = "wild_position"
    WILD_UNIVERSAL = "wild_universal"


class TurnPhase(str, Enum):
    DRAW = "draw"
    PLAY_CARD = "play_card"
    AWAIT_MOVE = "await_move"


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class TurnContinuation(str, Enum):
    """Signal returned by every sequential turn operation."""
    CONTINUE = "continue"
    AWAIT_MOVE = "await_move"
    END_TURN = "end_turn"


@dataclass(frozen=True)
class CardNomination:
    character: Character
    body_part: BodyPart


@dataclass
class Card:
    id: str
    type: CardType
    character: Optional[Character] = None  # fixed for REGULAR and WILD_CHARACTER
    body_part: Optional[BodyPart] = None  # fixed for REGULAR and WILD_POSITION
    nomination: Optional[CardNomination] = None
    is_fast_card: bool = False

    @property
    def is_wild(self) -> bool:
        return self.type != CardType.REGULAR

    def clone(self) -> 'Card':
        # CardNomination is frozen, sharing it is safe
        return Card(
            id=self.id,
            type=self.type,
            character=self.character,
            body_part=self.body_part,
            nomination=self.nomination,
            is_fast_card=self.is_fast_card,
        )

    def __str__(self) -> str:
        character = self.character.value if self.character else Character.WILD.value
        body_part = self.body_part.value if self.body_part else BodyPart.WILD.value
        base = f"{character} {body_part}"
        if self.nomination:
            return f"{base} (nominated as {self.nomination.character.value} {self.nomination.body_part.value})"
        return base


@dataclass
class Pile:
    body_part: BodyPart
    cards: List[Card] = field(default_factory=list)  # last card is the top

    @property
    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def clone(self) -> 'Pile':
        return Pile(body_part=self.body_part, cards=[card.clone() for card in self.cards])


def _empty_piles() -> Dict[BodyPart, Pile]:
    return {
        BodyPart.HEAD: Pile(BodyPart.HEAD),
        BodyPart.TORSO: Pile(BodyPart.TORSO),
        BodyPart.LEGS: Pile(BodyPart.LEGS),
    }


@dataclass
class Stack:
    id: str
    owner: str
    piles: Dict[BodyPart, Pile] = field(default_factory=_empty_piles)

    def card_count(self) -> int:
        return sum(len(pile.cards) for pile in self.piles.values())

    def is_empty(self) -> bool:
        return self.card_count() == 0

    def clone(self) -> 'Stack':
        return Stack(
            id=self.id,
            owner=self.owner,
            piles={body_part: pile.clone() for body_part, pile in self.piles.items()},
        )


@dataclass
class Player:
    id: str
    name: Optional[str] = None
    hand: List[Card] = field(default_factory=list)
    scored_characters: Set[Character] = field(default_factory=set)

    def has_card(self, card_id: str) -> bool:
        return any(card.id == card_id for card in self.hand)

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def clone(self) -> 'Player':
        return Player(
            id=self.id,
            name=self.name,
            hand=[card.clone() for card in self.hand],
            scored_characters=set(self.scored_characters),
        )


@dataclass
class TurnState:
    phase: TurnPhase = TurnPhase.DRAW
    cards_played_this_turn: List[Card] = field(default_factory=list)
    last_card_was_wild: bool = False
    moves_earned_this_turn: int = 0
    can_continue_playing: bool = False
    has_drawn_card: bool = False

    def clone(self) -> 'TurnState':
        return TurnState(
            phase=self.phase,
            cards_played_this_turn=[card.clone() for card in self.cards_played_this_turn],
            last_card_was_wild=self.last_card_was_wild,
            moves_earned_this_turn=self.moves_earned_this_turn,
            can_continue_playing=self.can_continue_playing,
            has_drawn_card=self.has_drawn_card,
        )


@dataclass
class GameState:
    players: List[Player]
    current_player: str
    deck: List[Card] = field(default_factory=list)  # draw from the end
    stacks: List[Stack] = field(default_factory=list)
    pending_moves: int = 0
    game_phase: GamePhase = GamePhase.SETUP
    winner: Optional[str] = None
    current_turn_state: Optional[TurnState] = None
    scored_cards: List[Card] = field(default_factory=list)  # removed from play by completions
    next_stack_number: int = 1
    rule_config: RuleConfig = field(default_factory=lambda: default_rules)

    def clone(self) -> 'GameState':
        """Deep copy that shares no mutable container with this state."""
        return GameState(
            players=[player.clone() for player in self.players],
            current_player=self.current_player,
            deck=[card.clone() for card in self.deck],
            stacks=[stack.clone() for stack in self.stacks],
            pending_moves=self.pending_moves,
            game_phase=self.game_phase,
            winner=self.winner,
            current_turn_state=self.current_turn_state.clone() if self.current_turn_state else None,
            scored_cards=[card.clone() for card in self.scored_cards],
            next_stack_number=self.next_stack_number,
            rule_config=self.rule_config.model_copy(),
        )

    def all_cards(self) -> List[Card]:
        """Every card in hands, deck, stacks and the scored pile."""
        cards = list(self.deck) + list(self.scored_cards)
        for player in self.players:
            cards.extend(player.hand)
        for stack in self.stacks:
            for pile in stack.piles.values():
                cards.extend(pile.cards)
        return cards

    def restore(self, snapshot: 'GameState') -> None:
        """
        Overwrite this state in place with the contents of ``snapshot``.

        Cards, players and stacks that already exist here keep their identity,
        so references held by callers stay attached to the live state. Only
        their contents (positions, nominations, scores) are rolled back.
        """
        source = snapshot.clone()
        live_cards = {card.id: card for card in self.all_cards()}
        live_players = {player.id: player for player in self.players}
        live_stacks = {stack.id: stack for stack in self.stacks}

        def adopt(cards: List[Card]) -> List[Card]:
            adopted = []
            for card in cards:
                live = live_cards.get(card.id)
                if live is None:
                    adopted.append(card)
                    continue
                live.nomination = card.nomination
                adopted.append(live)
            return adopted

        players = []
        for saved in source.players:
            player = live_players.get(saved.id, saved)
            player.name = saved.name
            player.hand = adopt(saved.hand)
            player.scored_characters = saved.scored_characters
            players.append(player)

        stacks = []
        for saved in source.stacks:
            stack = live_stacks.get(saved.id, saved)
            stack.owner = saved.owner
            stack.piles = {
                body_part: Pile(body_part, adopt(pile.cards)) for body_part, pile in saved.piles.items()
            }
            stacks.append(stack)

        turn_state = source.current_turn_state
        if turn_state is not None:
            turn_state.cards_played_this_turn = adopt(turn_state.cards_played_this_turn)

        self.players = players
        self.current_player = source.current_player
        self.deck = adopt(source.deck)
        self.stacks = stacks
        self.pending_moves = source.pending_moves
        self.game_phase = source.game_phase
        self.winner = source.winner
        self.current_turn_state = turn_state
        self.scored_cards = adopt(source.scored_cards)
        self.next_stack_number = source.next_stack_number
        self.rule_config = source.rule_config


@dataclass(frozen=True)
class MoveAction:
    card_id: str
    from_stack_id: str
    from_pile: BodyPart
    to_stack_id: str  # "new" creates a stack for the current player
    to_pile: BodyPart


@dataclass
class PlayCardAction:
    card: Union[Card, str]  # card or card id
    target_stack_id: Optional[str] = None
    target_pile: Optional[BodyPart] = None
    nomination: Optional[CardNomination] = None


@dataclass(frozen=True)
class PlayerHandle:
    id: str
    name: str
