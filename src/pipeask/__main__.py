from pipeask.cli import entrypoint

entrypoint()
