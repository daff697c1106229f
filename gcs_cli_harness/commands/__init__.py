"""
Command pattern implementation for the gsutil / gcloud storage harness.

This package separates running a CLI process from interpreting what it
printed, so every command's output grammar can be tested with canned text
and a fake executor instead of a live bucket.
"""
