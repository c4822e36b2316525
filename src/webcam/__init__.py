"""
HandNav Webcam Module

Camera capture and MediaPipe landmark detection feeding the gesture engine.
"""
from .hand_tracker import HandTracker
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'WebcamWorker',
]
