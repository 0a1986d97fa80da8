"""Infrastructure layer: data file encodings and the event store.

The service layer bridges between the domain event log and the file on disk.
"""
