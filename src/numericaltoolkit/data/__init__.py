"""
The DATA layer holds flat sample collections and the descriptive
statistics computed over them.
"""
