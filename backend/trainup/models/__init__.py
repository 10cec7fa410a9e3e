from trainup.models.morning_diary import MorningDiary
from trainup.models.training_entry import TrainingEntry

__all__ = [
    "MorningDiary",
    "TrainingEntry",
]
