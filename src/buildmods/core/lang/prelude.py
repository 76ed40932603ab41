# src/buildmods/core/lang/prelude.py
"""Prelude de bootstrap avaliado antes dos arquivos de configuração."""

PRELUDE_FILENAME = "<prelude>"

PRELUDE_SOURCE = '''\
module = rule(
    attrs = dict(
        srcs = attr.files(),
        deps = attr.modules(),
    ),
)

def empty(name):
    module(name=name, srcs=[], deps=[])
'''
