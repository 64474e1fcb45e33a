"""
The CONTROLLER layer turns records into a block layout and input into camera
motion. Like the model, it does not import Qt or PyVista.
"""
