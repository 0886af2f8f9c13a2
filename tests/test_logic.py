import random

import pytest

from dendron.logic import (
    LABELS,
    Gradients,
    LogicSample,
    MultiOutputNeuron,
    evaluate,
    main,
    make_multi_label_data,
)
from dendron.neuron import Compartment


def _by_inputs():
    return {s.inputs: s for s in make_multi_label_data()}


def _neuron(seed=3):
    return MultiOutputNeuron.random(3, 8, len(LABELS), random.Random(seed))


def _zero_neuron():
    comps = [Compartment([0.0, 0.0, 0.0], 0.0) for _ in range(4)]
    return MultiOutputNeuron(comps, [[0.0] * 4 for _ in LABELS], [0.0] * len(LABELS))


def test_data_has_one_sample_per_pattern():
    data = make_multi_label_data()
    assert len(data) == 12
    assert len({s.inputs for s in data}) == 12
    assert all(len(s.expected) == len(LABELS) for s in data)


def test_two_input_truth_table_row():
    row = dict(zip(LABELS, _by_inputs()[(1.0, 1.0)].expected))
    assert row["AND"] == 1.0
    assert row["XOR"] == 0.0
    assert row["NAND"] == 0.0
    assert row["XNOR"] == 1.0
    assert row["FULL_ADDER_SUM"] == 0.0


def test_full_adder_rows():
    data = _by_inputs()
    full = dict(zip(LABELS, data[(1.0, 1.0, 1.0)].expected))
    assert full["FULL_ADDER_SUM"] == 1.0
    assert full["FULL_ADDER_CARRY"] == 1.0
    partial = dict(zip(LABELS, data[(0.0, 1.0, 1.0)].expected))
    assert partial["FULL_ADDER_SUM"] == 0.0
    assert partial["FULL_ADDER_CARRY"] == 1.0
    assert all(partial[label] == 0.0 for label in LABELS[:12])


def test_random_parameters_are_small():
    neuron = _neuron()
    params = [w for c in neuron.compartments for w in c.weights]
    params += [c.bias for c in neuron.compartments]
    params += [w for row in neuron.soma_weights for w in row] + neuron.soma_bias
    assert all(-0.05 <= p < 0.05 for p in params)
    assert neuron.num_outputs == len(LABELS)


def test_forward_ranges():
    outputs, comp_outs = _neuron().forward((1.0, 0.0, 1.0))
    assert len(outputs) == len(LABELS)
    assert len(comp_outs) == 8
    assert all(0.0 < o < 1.0 for o in outputs)
    assert all(-1.0 < c < 1.0 for c in comp_outs)


def test_forward_rejects_too_many_inputs():
    with pytest.raises(ValueError):
        _neuron().forward((1.0, 0.0, 1.0, 1.0))


def test_mismatched_soma_shapes_rejected():
    with pytest.raises(ValueError):
        MultiOutputNeuron([Compartment([0.0], 0.0)], [[0.0, 0.0]], [0.0])


def test_gradients_of_empty_batch_are_zero():
    grads = _neuron().gradients([])
    assert grads.loss == 0.0
    assert all(v == 0.0 for v in grads.soma_bias + grads.compartment_bias)


def test_gradients_are_additive_over_batches():
    neuron = _neuron()
    data = make_multi_label_data()
    whole = neuron.gradients(data)
    first = neuron.gradients(data[:5])
    rest = neuron.gradients(data[5:])
    assert whole.loss == pytest.approx(first.loss + rest.loss)
    for a, b, c in zip(whole.soma_bias, first.soma_bias, rest.soma_bias):
        assert a == pytest.approx(b + c)
    for a, b, c in zip(whole.compartment_bias, first.compartment_bias, rest.compartment_bias):
        assert a == pytest.approx(b + c)


def test_gradients_reject_wrong_target_count():
    with pytest.raises(ValueError):
        _neuron().gradients([LogicSample((0, 1), (1.0,))])


def test_apply_with_zero_rate_keeps_parameters():
    neuron = _neuron()
    before = (list(neuron.soma_bias), [list(c.weights) for c in neuron.compartments])
    neuron.apply(neuron.gradients(make_multi_label_data()), 0.0)
    assert (neuron.soma_bias, [c.weights for c in neuron.compartments]) == before


def test_apply_adds_scaled_gradients():
    neuron = _zero_neuron()
    grads = Gradients(
        soma_weights=[[1.0] * 4 for _ in LABELS],
        soma_bias=[2.0] * len(LABELS),
        compartment_weights=[[1.0, 1.0, 1.0] for _ in range(4)],
        compartment_bias=[4.0] * 4,
    )
    neuron.apply(grads, 0.5)
    assert neuron.soma_bias == [1.0] * len(LABELS)
    assert neuron.compartments[0].weights == [0.5, 0.5, 0.5]
    assert neuron.compartments[0].bias == 2.0


def test_training_reduces_error():
    neuron = _neuron()
    data = make_multi_label_data()
    first = neuron.train_epoch(data, 0.05, 2)
    last = first
    for _ in range(200):
        last = neuron.train_epoch(data, 0.05, 2)
    assert last < first


def test_worker_count_does_not_change_result():
    data = make_multi_label_data()
    one, four = _neuron(), _neuron()
    loss_one = one.train_epoch(data, 0.05, 1)
    loss_four = four.train_epoch(data, 0.05, 4)
    assert loss_one == pytest.approx(loss_four)
    assert one.soma_bias == pytest.approx(four.soma_bias)


def test_more_workers_than_samples():
    data = make_multi_label_data()
    a, b = _neuron(), _neuron()
    assert a.train_epoch(data, 0.05, 20) == pytest.approx(b.train_epoch(data, 0.05, 1))


@pytest.mark.parametrize("workers", [0, -1])
def test_invalid_worker_count(workers):
    with pytest.raises(ValueError):
        _neuron().train_epoch(make_multi_label_data(), 0.05, workers)


def test_empty_epoch_rejected():
    with pytest.raises(ValueError):
        _neuron().train_epoch([], 0.05)


def test_evaluate_half_outputs_round_up():
    data = make_multi_label_data()
    ones = sum(v for s in data for v in s.expected)
    assert evaluate(_zero_neuron(), data) == pytest.approx(ones / (len(data) * len(LABELS)) * 100)


def test_evaluate_empty_rejected():
    with pytest.raises(ValueError):
        evaluate(_neuron(), [])


def test_main_prints_report(capsys):
    assert main(["--seed", "1", "--epochs", "2", "--workers", "2"]) == 0
    out = capsys.readouterr().out
    assert "Epoch 0, Error:" in out
    assert out.count("Label: ") == 12 * len(LABELS)
    assert "Overall Accuracy:" in out