"""
Dominios específicos del motor de render.

Cada dominio define sus modelos, perfiles de estilo y renderer.
"""
