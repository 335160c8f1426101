import json
from typing import List, Optional

from pixelquiz.models import Question

DEFAULT_BANK = [
    {
        'id': 1,
        'question': "What is Mario's job?",
        'options': ['A: Plumber', 'B: Doctor', 'C: Racer', 'D: Chef'],
        'correctAnswer': 'A',
    },
    {
        'id': 2,
        'question': 'What color is Pikachu?',
        'options': ['A: Red', 'B: Blue', 'C: Yellow', 'D: Green'],
        'correctAnswer': 'C',
    },
    {
        'id': 3,
        'question': 'What does Pac-Man fear most?',
        'options': ['A: Dots', 'B: Ghosts', 'C: Walls', 'D: Cherries'],
        'correctAnswer': 'B',
    },
    {
        'id': 4,
        'question': 'How many lives does a cat have?',
        'options': ['A: 1', 'B: 3', 'C: 7', 'D: 9'],
        'correctAnswer': 'D',
    },
    {
        'id': 5,
        'question': 'What is 2 + 2?',
        'options': ['A: 3', 'B: 4', 'C: 5', 'D: 6'],
        'correctAnswer': 'B',
    },
]


def load_question_bank(path: Optional[str] = None) -> List[Question]:
    """Load the ordered question bank, from a JSON file when a path is given."""
    if path:
        with open(path, encoding='utf-8') as fh:
            raw = json.load(fh)
    else:
        raw = DEFAULT_BANK
    bank = [Question.from_dict(item) for item in raw]
    if not bank:
        raise ValueError('Question bank is empty')
    return bank
