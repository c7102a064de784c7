"""Core types shared by the shaping functions.

- enums: schema type tags and value kinds
- models: query result input and output shapes
- errors: exceptions raised while shaping
- paths: dotted-path access over metadata items
- values: cell value coercion
"""
