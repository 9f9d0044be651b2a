"""
Training Doctrine (FINAL)

------------------------------------------------------------
Unit of work
------------------------------------------------------------

Definition:
- One run     = one labeled table + one unlabeled table
- Model       = Batch (fit once on the training partition)
- Validation  = stratified k-fold CV inside the training partition,
                plus one untouched holdout partition

Semantics:
- Every fitted thing (column filter, center/scale/PCA, classifiers)
  is fitted on the training partition only.
- Holdout and unlabeled rows are only ever transformed / predicted.
- Nothing persists across runs; re-running with the same seed and
  inputs reproduces the same projections and predictions.

------------------------------------------------------------
Model families
------------------------------------------------------------

- lda : linear discriminant analysis (fast baseline)
- rf  : random forest
- gbm : gradient boosting

The model with the highest out-of-sample accuracy labels the
unlabeled rows. Ties go to the earlier family in config order.

------------------------------------------------------------
Failure semantics
------------------------------------------------------------

- A trainer that raises FitError is skipped; the others still run.
- If every trainer fails, the run fails.
- Schema / alignment problems are never skipped.
"""
