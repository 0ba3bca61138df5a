"""
Model imports
"""
# Base first
from tennis_coach.database import Base

# Then the models
from tennis_coach.models.coach import Coach
from tennis_coach.models.training_session import SessionStatus, SessionType, TrainingSession

__all__ = ["Base", "Coach", "TrainingSession", "SessionStatus", "SessionType"]
