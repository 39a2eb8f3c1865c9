# coding: utf8

import sys

import inidoc

# A section declared again in a later file replaces the earlier one.
doc = inidoc.Document()
for path in sys.argv[1:]:
    doc.load_file(path)

print(doc.dumps(), end="")
