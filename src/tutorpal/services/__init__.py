"""Command variants executed against the Model.

Every variant returns a CommandResult or raises one of the domain errors.
The click layer in :mod:`tutorpal.commands` is the only consumer that turns
those errors into process exit codes.
"""
