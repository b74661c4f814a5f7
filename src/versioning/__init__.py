"""Version requirement handling: data models, name normalization and desugaring."""
