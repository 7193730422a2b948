import threading
import time

import pytest

from equilibrium.controller.channels import FrameChannel
from equilibrium.exceptions import ChannelClosedError


def test_fifo_until_closed():
    channel = FrameChannel()
    for i in range(5):
        channel.send(i)
    channel.close()
    assert list(channel) == [0, 1, 2, 3, 4]


def test_send_on_closed_channel():
    channel = FrameChannel()
    channel.close()
    with pytest.raises(ChannelClosedError):
        channel.send(1)


def test_recv_on_closed_and_drained_channel():
    channel = FrameChannel()
    channel.send("last")
    channel.close()
    assert channel.recv() == "last"
    with pytest.raises(ChannelClosedError):
        channel.recv()


def test_recv_timeout():
    with pytest.raises(TimeoutError):
        FrameChannel().recv(timeout=0.05)


def test_negative_capacity():
    with pytest.raises(ValueError):
        FrameChannel(capacity=-1)


def test_order_across_threads():
    channel = FrameChannel(capacity=3)

    def produce():
        for i in range(100):
            channel.send(i)
        channel.close()

    producer = threading.Thread(target=produce)
    producer.start()
    received = list(channel)
    producer.join(timeout=10)

    assert received == list(range(100))


def test_bounded_send_blocks_until_received():
    channel = FrameChannel(capacity=1)
    channel.send(0)
    producer = threading.Thread(target=channel.send, args=(1,))
    producer.start()

    time.sleep(0.3)
    assert producer.is_alive()

    assert channel.recv(timeout=1) == 0
    producer.join(timeout=5)
    assert not producer.is_alive()
    assert channel.recv(timeout=1) == 1


def test_blocked_send_fails_when_consumer_closes():
    channel = FrameChannel(capacity=1)
    channel.send(0)
    errors = []

    def produce():
        try:
            channel.send(1)
        except ChannelClosedError as e:
            errors.append(e)

    producer = threading.Thread(target=produce)
    producer.start()
    time.sleep(0.2)
    channel.close()
    producer.join(timeout=5)

    assert len(errors) == 1
