"""Routing — exact-match route table and the Router that owns it.

Routes and middleware are registered during setup; the router freezes
on its first dispatch and is read-only from then on.
"""
