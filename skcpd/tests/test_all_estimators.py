"""Tests for all skcpd estimators, both detectors and interval scorers."""

from inspect import _empty, signature

import pytest
from skbase.base import BaseObject
from sktime.base import BaseEstimator
from sktime.tests.test_all_estimators import VALID_ESTIMATOR_TAGS
from sktime.utils.estimator_checks import check_estimator, parametrize_with_checks

from skcpd.change_detectors import CHANGE_DETECTORS, PELTPruning
from skcpd.change_scores import CHANGE_SCORES
from skcpd.costs import COSTS

INTERVAL_SCORERS = COSTS + CHANGE_SCORES
ESTIMATORS = CHANGE_DETECTORS + INTERVAL_SCORERS
VALID_SKCPD_TAGS = list(VALID_ESTIMATOR_TAGS) + [
    "task",
    "learning_type",
    "distribution_type",
    "is_penalised",
    "supports_fixed_param",
]


# Detectors carry the "detector" object type, which sktime maps to the test suite
# of its own BaseDetector. Only the interval scorers run the generic checks.
@parametrize_with_checks(INTERVAL_SCORERS)
def test_sktime_compatible_estimators(obj, test_name):
    check_estimator(
        obj,
        tests_to_run=test_name,
        raise_exceptions=True,
        # Custom tags are not in sktime's VALID_ESTIMATOR_TAGS. The tag tests are
        # implemented in this file against VALID_SKCPD_TAGS instead.
        tests_to_exclude=[
            "test_estimator_tags",
            "test_valid_estimator_tags",
            "test_valid_estimator_class_tags",
        ],
    )


@pytest.mark.parametrize("estimator_class", ESTIMATORS)
def test_estimator_tags(estimator_class: type[BaseEstimator]):
    """Check conventions on estimator tags.

    Adapted from sktime.test_all_estimators.TestAllObjects.test_estimator_tags.
    """
    Estimator = estimator_class

    assert hasattr(Estimator, "get_class_tags")
    all_tags = Estimator.get_class_tags()
    assert isinstance(all_tags, dict)
    assert all(isinstance(key, str) for key in all_tags.keys())
    if hasattr(Estimator, "_tags"):
        tags = Estimator._tags
        msg = (
            f"_tags attribute of {estimator_class} must be dict, "
            f"but found {type(tags)}"
        )
        assert isinstance(tags, dict), msg
        assert len(tags) > 0, f"_tags dict of class {estimator_class} is empty"

    # Avoid ambiguous class attributes
    ambiguous_attrs = ("tags", "tags_")
    for attr in ambiguous_attrs:
        assert not hasattr(Estimator, attr), (
            f"Please avoid using the {attr} attribute to disambiguate it from "
            f"estimator tags."
        )


@pytest.mark.parametrize("Estimator", ESTIMATORS)
def test_valid_estimator_class_tags(Estimator: type[BaseEstimator]):
    """Check that estimator class tags are in VALID_SKCPD_TAGS."""
    for tag in Estimator.get_class_tags().keys():
        msg = "Found invalid tag: %s" % tag
        assert tag in VALID_SKCPD_TAGS, msg


@pytest.mark.parametrize("Estimator", ESTIMATORS + [PELTPruning])
def test_no_mutable_defaults(Estimator: BaseObject):
    """Ensure no estimators have mutable default arguments."""
    estimator = Estimator.create_test_instance()
    sig = signature(estimator.__init__)
    mutable_types = (
        list,
        dict,
        set,
        BaseEstimator,
        BaseObject,
    )
    for param in sig.parameters.values():
        if param.default is not _empty and isinstance(param.default, mutable_types):
            raise AssertionError(
                f"Mutable default argument found in {Estimator.__name__}: {param.name}"
            )


@pytest.mark.parametrize("Estimator", ESTIMATORS + [PELTPruning])
def test_all_test_params_construct(Estimator: BaseObject):
    """Check that every test parameter set constructs and clones."""
    instances, names = Estimator.create_test_instances_and_names()
    assert len(instances) == len(names) >= 1
    for instance in instances:
        clone = instance.clone()
        assert clone is not instance
        assert clone.get_params(deep=False).keys() == instance.get_params(
            deep=False
        ).keys()


@pytest.mark.parametrize("Estimator", ESTIMATORS)
def test_set_params_round_trip(Estimator: BaseEstimator):
    estimator = Estimator.create_test_instance()
    params = estimator.get_params(deep=False)
    fresh = Estimator(**params)
    assert fresh.get_params(deep=False).keys() == params.keys()
