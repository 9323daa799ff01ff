"""clipcast — editing core for screen/camera recordings.

Build a multi-track timeline from a finished recording, split clips
across linked tracks, and derive automatic zoom-in keyframes from the
clicks captured during the session.
"""
