"""Runtime services shared by buffers, lists and the playground."""
