"""
Services layer - business logic goes here, not in routes.

- classifier: theme classification through a hosted language model
- comment_store: the comments collection in Firestore
"""
