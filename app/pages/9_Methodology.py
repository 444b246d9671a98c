import streamlit as st

st.set_page_config(page_title="Methodology", layout="wide")
st.title("Methodology")

st.markdown(
    r"""
### Erlang C

- Traffic intensity (Erlangs), AHT and interval in minutes:
  \[
  a = \frac{\text{calls} \cdot \text{AHT}}{\text{interval\_minutes}}
  \]

- Probability of wait, for \(n > a\) (otherwise 1):
  \[
  P_w = \frac{\frac{a^n}{n!}}{\sum_{k=0}^{n-1}\frac{a^k}{k!} + \frac{a^n}{n!}\cdot\frac{n}{n-a}}
  \]

- ASA (same unit as AHT):
  \[
  ASA = P_w\cdot \frac{AHT}{n-a}
  \]

- Service Level at answer time \(T\) (seconds, divided directly by AHT):
  \[
  SL(T)=1 - P_w\cdot e^{-(n-a)\cdot(T/AHT)}
  \]

### Staffing logic

- Start at \(\lceil a \rceil\), add one agent, check the service level; repeat until the
  target is met or 1000 agents is reached.
- Occupancy:
  \[
  \text{occupancy} = \frac{a}{n}
  \]

### Shrinkage

- Shrinkage % = off-phone minutes / 480 × 100
- Scheduled headcount:
  \[
  \text{scheduled} = \left\lceil \frac{n}{1-\text{shrinkage}/100} \right\rceil
  \]
"""
)
