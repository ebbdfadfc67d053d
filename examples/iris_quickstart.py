import pandas as pd
from time import perf_counter
from sklearn.datasets import load_iris
from numlpy import (
    Descriptor, Property, StringProperty,
    KNNGenerator, LogisticRegressionGenerator,
    Learner, best, enable_logging,
)

iris = load_iris(as_frame=True)
df = iris.frame.rename(columns=lambda c: c.replace(" (cm)", "").replace(" ", "_"))
df["species"] = iris.target_names[df["target"]]
feats = ["sepal_length", "sepal_width", "petal_length", "petal_width"]

enable_logging("INFO")

descriptor = Descriptor([Property(f) for f in feats], StringProperty("species"), name="iris")
print(descriptor)

learner = Learner(training_percentage=0.8, repeat=10, n_jobs=-1, random_state=42)

t0 = perf_counter()
knn = learner.learn_frame(df, KNNGenerator(k=5, descriptor=descriptor))
print(f"knn: {perf_counter()-t0:.3f} s")
print(knn)

# binary problem: setosa or not
df["setosa"] = (df["species"] == "setosa").astype(int)
binary = Descriptor([Property(f) for f in feats], Property("setosa", int), name="setosa")
logit = learner.learn_frame(df, LogisticRegressionGenerator(polynomial_features=0, descriptor=binary))
print(logit)

winner = best([knn, logit])
print(f"best: {type(winner.model).__name__} ({winner.accuracy:.2%})")
winner.model.save("iris_model.joblib")
