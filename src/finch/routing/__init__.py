"""Routing — convention-derived, priority-ordered route table.

Controllers are reflected into route records once at setup; the records
are scanned in table order for every request and the first match wins.
"""
