"""
Model evaluation module for the heart-attack SVM classifiers.

Provides the held-out diagnostics for each fitted kernel model:
- Misclassification rate
- Confusion matrix (predicted label × true label)
- ROC curve and AUC with the predicted label as the score
- Label scatterplots and an ROC overlay for qualitative comparison
"""
import pandas as pd
import numpy as np
import logging
from pathlib import Path
from sklearn.metrics import confusion_matrix, roc_curve, auc
from typing import Dict, Tuple, Optional, Any
import matplotlib.pyplot as plt
import seaborn as sns

from heartsvm import config
from heartsvm.training_pipeline.tune_grid import KernelModel

logger = logging.getLogger(__name__)

LABELS = [0, 1]


def misclassification_rate(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Fraction of predictions that differ from the true label."""
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    return float(np.mean(y_pred != y_true))


def confusion_table(y_true: np.ndarray, y_pred: np.ndarray) -> pd.DataFrame:
    """
    Build a 2×2 confusion table with predictions on rows and truth on columns.

    Both labels always appear, even when a model predicts a single class.
    Row sums are predicted-label counts, column sums are true-label counts.

    Example:
        >>> confusion_table([0, 0, 1, 1], [0, 1, 1, 1])
        true         0  1
        predicted
        0            1  0
        1            1  2
    """
    cm = confusion_matrix(y_true, y_pred, labels=LABELS).T
    return pd.DataFrame(
        cm,
        index=pd.Index(LABELS, name="predicted"),
        columns=pd.Index(LABELS, name="true")
    )


def roc_summary(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, Any]:
    """
    Compute the ROC curve and AUC using the predicted label as the score.

    Args:
        y_true: True labels (0/1).
        y_pred: Predicted labels (0/1), used as the discrimination score.

    Returns:
        Dictionary with:
        - auc: Area under the ROC curve
        - curve: DataFrame with fpr, tpr and threshold columns
    """
    fpr, tpr, thresholds = roc_curve(y_true, y_pred)
    curve = pd.DataFrame({'fpr': fpr, 'tpr': tpr, 'threshold': thresholds})

    return {'auc': float(auc(fpr, tpr)), 'curve': curve}


def evaluate_model(model: KernelModel, test_df: pd.DataFrame) -> Dict[str, Any]:
    """
    Evaluate one fitted kernel model on the test partition.

    Args:
        model: Fitted KernelModel.
        test_df: Test partition (features + HEARTATTACK).

    Returns:
        Dictionary with predictions, misclassification_rate,
        confusion_matrix and roc.

    Example:
        >>> result = evaluate_model(models['linear'], test_df)
        >>> print(f"Test error: {result['misclassification_rate']:.4f}")
        Test error: 0.0690
    """
    y_true = test_df[config.TARGET_COLUMN].to_numpy()
    y_pred = model.predict(test_df)

    return {
        'kernel': model.kernel,
        'predictions': y_pred,
        'misclassification_rate': misclassification_rate(y_true, y_pred),
        'confusion_matrix': confusion_table(y_true, y_pred),
        'roc': roc_summary(y_true, y_pred),
    }


def evaluate_all(
    models: Dict[str, KernelModel],
    test_df: pd.DataFrame
) -> Dict[str, Dict[str, Any]]:
    """
    Evaluate every kernel model and log its diagnostics.

    Returns:
        Dict of kernel -> evaluate_model() result.
    """
    logger.info(f"Evaluating {len(models)} models on {len(test_df):,} test records...")

    results = {}
    for kernel, model in models.items():
        result = evaluate_model(model, test_df)
        results[kernel] = result

        logger.info(f"\n[{kernel}] parameters: {model.best_params}")
        logger.info(f"[{kernel}] misclassification rate: {result['misclassification_rate']:.4f}")
        logger.info(f"[{kernel}] confusion matrix:\n{result['confusion_matrix'].to_string()}")
        logger.info(f"[{kernel}] ROC AUC: {result['roc']['auc']:.4f}")
        logger.info(f"[{kernel}] ROC curve:\n{result['roc']['curve'].to_string(index=False)}")

    return results


def create_comparison_table(
    models: Dict[str, KernelModel],
    results: Dict[str, Dict[str, Any]]
) -> pd.DataFrame:
    """
    Summarize all kernels side by side, lowest test error first.

    Columns:
        - kernel, best_params, cv_error, test_error, auc
    """
    rows = []
    for kernel, result in results.items():
        rows.append({
            'kernel': kernel,
            'best_params': models[kernel].best_params,
            'cv_error': models[kernel].cv_error,
            'test_error': result['misclassification_rate'],
            'auc': result['roc']['auc'],
        })

    table = pd.DataFrame(rows).sort_values('test_error', kind='stable').reset_index(drop=True)

    logger.info(f"\nModel comparison:\n{table.to_string(index=False)}")

    return table


def plot_label_scatter(
    df: pd.DataFrame,
    labels: np.ndarray,
    title: str,
    x: str = None,
    y: str = None,
    figsize: Tuple[int, int] = (8, 6),
    save_path: Optional[str] = None
) -> None:
    """
    Scatter two covariates colored by a label vector (actual or predicted).

    Args:
        df: Records to plot.
        labels: One label per row of df.
        title: Plot title.
        x: Column for the x axis. If None, uses config.SCATTER_X_COLUMN.
        y: Column for the y axis. If None, uses config.SCATTER_Y_COLUMN.
        figsize: Figure size (width, height).
        save_path: If provided, save plot to this path.
    """
    if x is None:
        x = config.SCATTER_X_COLUMN
    if y is None:
        y = config.SCATTER_Y_COLUMN

    plot_df = pd.DataFrame({
        x: df[x].to_numpy(),
        y: df[y].to_numpy(),
        'label': np.asarray(labels)
    })

    fig, ax = plt.subplots(figsize=figsize)
    sns.scatterplot(
        data=plot_df, x=x, y=y, hue='label',
        hue_order=LABELS, palette={0: 'tab:blue', 1: 'tab:red'},
        alpha=0.6, s=15, ax=ax
    )
    ax.set_title(title, fontsize=14)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Scatterplot saved to: {save_path}")

    plt.close(fig)


def plot_roc_curves(
    results: Dict[str, Dict[str, Any]],
    figsize: Tuple[int, int] = (7, 7),
    save_path: Optional[str] = None
) -> None:
    """
    Overlay the ROC curves of all kernels with their AUC in the legend.
    """
    fig, ax = plt.subplots(figsize=figsize)

    for kernel, result in results.items():
        curve = result['roc']['curve']
        ax.plot(
            curve['fpr'], curve['tpr'],
            marker='o', label=f"{kernel} (AUC = {result['roc']['auc']:.3f})"
        )

    ax.plot([0, 1], [0, 1], linestyle='--', color='grey', label='chance')
    ax.set_xlabel('False Positive Rate', fontsize=12)
    ax.set_ylabel('True Positive Rate', fontsize=12)
    ax.set_title('ROC Curves - Test Set', fontsize=14)
    ax.legend(loc='lower right')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"ROC plot saved to: {save_path}")

    plt.close(fig)


def render_report_plots(
    results: Dict[str, Dict[str, Any]],
    test_df: pd.DataFrame,
    output_dir: Optional[Path] = None
) -> None:
    """
    Render the actual-label scatter, one predicted-label scatter per kernel
    and the ROC overlay into output_dir.
    """
    if output_dir is None:
        output_dir = config.REPORTS_DIR
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plot_label_scatter(
        test_df,
        test_df[config.TARGET_COLUMN].to_numpy(),
        title="Heart attack history - actual",
        save_path=output_dir / "scatter_actual.png"
    )

    for kernel, result in results.items():
        plot_label_scatter(
            test_df,
            result['predictions'],
            title=f"Heart attack history - predicted ({kernel} SVM)",
            save_path=output_dir / f"scatter_{kernel}.png"
        )

    plot_roc_curves(results, save_path=output_dir / "roc_curves.png")
