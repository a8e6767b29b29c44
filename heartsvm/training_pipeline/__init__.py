"""
Training pipeline for the heart-attack SVM classifiers.

Contains modules for the train/test split, per-kernel grid search and model evaluation.
"""
