"""v-t 图读数：面积求路程、停止时刻、末速度"""
from __future__ import annotations
import random
from linmotion_quiz.builders import register
from linmotion_quiz.builders.base import question_id
from linmotion_quiz.models import CorrectAnswer, Point, Question, VtGraph


@register("vt-area", family="velocity-area", answer_type="distance")
def build_vt_area(rng: random.Random) -> Question:
    velocity = rng.randint(3, 6)
    duration = rng.randint(3, 5)
    distance = velocity * duration
    return Question(
        id=question_id(rng, "vt-area"),
        prompt="לפניכם גרף מהירות-זמן של תנועת גוף. איזה מרחק עובר הגוף בזמן התנועה?",
        representation=VtGraph(
            points=(Point(0, velocity), Point(duration, velocity)),
            max_time=duration,
            min_velocity=0,
            max_velocity=velocity + 2,
            x_ticks=(0, duration),
            y_ticks=(velocity,),
        ),
        correct_answer=CorrectAnswer(distance, "m"),
        explanation=f"שטח = {velocity} × {duration} = {distance} מ׳.",
    )


@register("vt-stop", family="velocity-area", answer_type="time")
def build_vt_stop(rng: random.Random) -> Question:
    initial = rng.randint(6, 9)
    stop_time = rng.randint(3, 5)
    # 图像可以越过零点继续反向运动
    factor = rng.randint(1, 3)
    duration = stop_time * factor
    final = initial * (1 - factor)
    return Question(
        id=question_id(rng, "vt-stop"),
        prompt="באיזה רגע הגוף נעצר?",
        representation=VtGraph(
            points=(Point(0, initial), Point(duration, final)),
            max_time=duration,
            min_velocity=final,
            max_velocity=initial,
            x_ticks=(0, duration),
            y_ticks=tuple(sorted({final, 0, initial})),
        ),
        correct_answer=CorrectAnswer(stop_time, "s"),
        explanation=(
            f"המהירות יורדת מ־{initial} m/s ומגיעה לאפס ברגע t={stop_time}s."
        ),
    )


@register("vt-final-velocity", family="velocity-area", answer_type="speed")
def build_vt_final_velocity(rng: random.Random) -> Question:
    duration = rng.randint(3, 5)
    final = rng.randint(5, 9)
    return Question(
        id=question_id(rng, "vt-final-velocity"),
        prompt="מה המהירות בסוף קו התאוצה?",
        representation=VtGraph(
            points=(Point(0, 0), Point(duration, final)),
            max_time=duration,
            min_velocity=0,
            max_velocity=final,
            x_ticks=(0, duration),
            y_ticks=(0, final),
        ),
        correct_answer=CorrectAnswer(final, "m/s"),
        explanation=f"המהירות הסופית היא {final} m/s.",
    )
