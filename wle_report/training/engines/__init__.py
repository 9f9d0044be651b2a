"""
Training Engines (FINAL)

Engines own ALL statistical semantics; steps only orchestrate.

- model_train_engine : shared CV-tuned batch fit contract
- model/             : LDA / Random Forest / Gradient Boosting engines
- evaluate_engine    : confusion matrix, accuracy, kappa, row alignment
- predict_engine     : labels for the unlabeled table, row order kept
- report_engine      : human-readable report rendering

Training Guarantees
-------------------

On successful completion every trainer produces one TrainedModel:

TrainedModel.estimator
    fitted estimator (best CV candidate, refit on all training rows)

TrainedModel.feature_names
    feature order that MUST match predict-time tables.

Predict checks the feature schema; it does not re-validate training.
"""
