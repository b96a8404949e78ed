"""TutorPal — tutor and student records managed through discrete commands."""

__version__ = "0.3.0"
