""":any:`Field`, the :any:`Record` it belongs to, and the helpers it is built from."""
