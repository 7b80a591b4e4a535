"""Inventory policy layer (env/ConfigMap driven).

Decides whether an apply or prune may touch a live object, based on the object's
owning-inventory annotation and the configured adoption policy.
"""
