import logging

import streamlit as st
from scorecard import CONFIGS, score
from scorecard_settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.log_level)

GRADE_COLORS = {"A+": "green", "A": "green", "B": "orange", "C": "orange", "D": "red", "F": "red"}

st.title("Metabolic Health & Longevity Scorecard")
modes = list(CONFIGS)
mode = st.selectbox("Scoring mode", modes, index=modes.index(settings.mode))

# Text inputs so an empty box means "not measured"
st.header("Basic information")
form = {
    "age": st.text_input("Age", placeholder="25"),
    "sex": st.selectbox("Sex", ["", "male", "female"]),
}

st.header("Metabolic health")
form["a1c"] = st.text_input("A1c (%)", placeholder="5.4")
form["ldl"] = st.text_input("LDL (mg/dL)", placeholder="90")
form["lpa"] = st.text_input("Lp(a) (nmol/L)", placeholder="40")
form["apoB"] = st.text_input("ApoB (mg/dL)", placeholder="75")
form["systolic"] = st.text_input("Systolic BP (mmHg)", placeholder="115")
form["diastolic"] = st.text_input("Diastolic BP (mmHg)", placeholder="75")
form["waistHeightRatio"] = st.text_input("Waist/height ratio", placeholder="0.45")

st.header("Fitness & body composition")
form["vo2Max"] = st.text_input("VO2max (ml/kg/min)", placeholder="45")
form["gripStrength"] = st.text_input("Grip strength (kg)", placeholder="40")
form["bodyFat"] = st.text_input("Body fat (%)", placeholder="15")

card = score(form, mode)

cols = st.columns(4)
cols[0].metric("Metabolic", card.metabolic)
cols[1].metric("VO2max", card.cardio_fitness)
cols[2].metric("Grip strength", card.grip_strength)
cols[3].metric("Body composition", card.body_composition)

color = GRADE_COLORS[card.grade.letter]
st.metric("Total score", f"{card.total}/100")
st.markdown(f"## :{color}[{card.grade.letter}] {card.grade.meaning}")
st.caption(card.grade.advice)
